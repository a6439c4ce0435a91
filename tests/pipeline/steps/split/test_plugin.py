"""Tests for the build hook that runs the chunk splitter."""

import pytest

from chunksplit.core.errors import InvalidConfiguration
from chunksplit.pipeline.runner import run
from chunksplit.pipeline.session import BuildSession
from chunksplit.pipeline.steps.split import ChunkSplittingPlugin, SplitOptions

pytestmark = pytest.mark.unit


class TestChunkSplittingPlugin:
    """Test once-per-build splitting through the session hooks."""

    def test_taps_both_optimize_phases(self, graph):
        session = BuildSession(graph, build_id="b1")
        plugin = ChunkSplittingPlugin()

        plugin.apply(session)

        assert session.hooks.callbacks("optimize-chunks") == [plugin.optimize_chunks]
        assert session.hooks.callbacks("optimize-extracted-chunks") == [
            plugin.optimize_chunks
        ]
        assert session.hooks.callbacks("seal") == []

    def test_reports_added_chunks_once(self, graph, make_chunk):
        make_chunk("main", count=25)
        session = BuildSession(graph, build_id="b1")
        plugin = ChunkSplittingPlugin(SplitOptions(max_modules_per_chunk=10))

        first = plugin.optimize_chunks(session.chunks(), session)
        second = plugin.optimize_chunks(session.chunks(), session)

        assert first is True
        assert second is None
        assert len(graph.chunks) == 3
        assert session.has_marker(plugin.ident)

    def test_returns_false_without_changes(self, graph, make_chunk):
        make_chunk("main", count=5)
        session = BuildSession(graph, build_id="b1")
        plugin = ChunkSplittingPlugin()

        assert plugin.optimize_chunks(session.chunks(), session) is False

    def test_stores_assurance_report(self, graph, make_chunk):
        make_chunk("main", count=25)
        session = BuildSession(graph, build_id="b1")
        plugin = ChunkSplittingPlugin(SplitOptions(max_modules_per_chunk=10))

        plugin.optimize_chunks(session.chunks(), session)

        report = session.reports[plugin.ident]
        assert report["status"] == "PASS"
        assert report["chunkStats"]["created"] == 2

    def test_each_instance_has_its_own_marker(self, graph, make_chunk):
        make_chunk("main", count=25)
        session = BuildSession(graph, build_id="b1")
        a = ChunkSplittingPlugin(SplitOptions(max_modules_per_chunk=10))
        b = ChunkSplittingPlugin(SplitOptions(max_modules_per_chunk=10))

        assert a.ident != b.ident
        assert a.optimize_chunks(session.chunks(), session) is True
        # Parts of the first run are already within bounds
        assert b.optimize_chunks(session.chunks(), session) is False

    def test_full_build_splits_once(self, graph, make_chunk):
        main = make_chunk("main", count=250, entry=True)
        graph.add_entrypoint("main", [main])
        session = BuildSession(graph, build_id="b1")
        ChunkSplittingPlugin().apply(session)

        run(session, max_optimize_passes=5)

        assert len(graph.chunks) == 4
        assert graph.entrypoints["main"].chunks[-1] is main

    def test_invalid_options_fail_the_build(self, graph, make_chunk):
        make_chunk("main", count=250)
        session = BuildSession(graph, build_id="b1")
        ChunkSplittingPlugin(SplitOptions(max_modules_per_chunk=0)).apply(session)

        with pytest.raises(InvalidConfiguration):
            run(session, max_optimize_passes=5)

        assert len(graph.chunks) == 1


class TestEntryLimitZero:
    """A build with ``max_modules_per_entry=0`` passes assurance."""

    def test_report_passes(self, graph, make_chunk):
        main = make_chunk("main", count=5, entry=True)
        graph.add_entrypoint("main", [main])
        session = BuildSession(graph, build_id="b1")
        plugin = ChunkSplittingPlugin(
            SplitOptions(max_modules_per_chunk=1, max_modules_per_entry=0)
        )
        plugin.apply(session)

        run(session)

        report = session.reports[plugin.ident]
        assert [c.module_count for c in graph.chunks] == [1, 1, 1, 1, 1]
        assert report["sizeBound"]["count"] == 0
        assert report["status"] == "PASS"
        assert graph.entrypoints["main"].chunks[-1] is main
