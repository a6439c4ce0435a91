"""Global test configuration for chunksplit tests."""

import pytest
import structlog

from chunksplit.graph import ChunkGraph


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep logger configuration from leaking between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def graph():
    """Provide an empty chunk graph."""
    return ChunkGraph()


@pytest.fixture
def make_chunk(graph):
    """Create a chunk holding ``count`` fresh modules named ``<name>/<i>``."""

    def _make_chunk(name="main", count=0, initial=True, entry=False, modules=()):
        chunk = graph.add_chunk(name, initial=initial, entry=entry)
        for module in modules:
            graph.connect(module, chunk)
        for i in range(count):
            graph.connect(graph.add_module(f"{name}/{i}"), chunk)
        return chunk

    return _make_chunk


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Run in a temporary directory with a private var/ workspace."""
    from chunksplit.core import config as config_module

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        config_module.SETTINGS, "CHUNKSPLIT_WORKDIR", str(tmp_path / "var")
    )
    return tmp_path
