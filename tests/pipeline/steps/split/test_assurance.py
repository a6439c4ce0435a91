"""Tests for split assurance reporting."""

import pytest

from chunksplit.pipeline.steps.split import (
    SplitOptions,
    build_split_assurance,
    capture_membership,
    split_chunks,
)
from chunksplit.pipeline.steps.split.orchestrator import SplitPiece

pytestmark = pytest.mark.unit


class TestSplitAssurance:
    """Test the assurance report of a split pass."""

    def test_clean_pass(self, graph, make_chunk):
        main = make_chunk("main", count=250, entry=True)
        lazy = make_chunk("lazy", count=150, initial=False)
        chunks = [main, lazy]
        options = SplitOptions()
        before = capture_membership(chunks)

        pieces = split_chunks(chunks, graph, options)
        report = build_split_assurance(before, chunks, pieces, options)

        assert report["status"] == "PASS"
        assert report["limits"] == {"maxModulesPerChunk": 100, "maxModulesPerEntry": 1}
        assert report["chunkStats"]["created"] == 4
        assert report["chunkStats"]["min"] == 1
        assert report["chunkStats"]["max"] == 100
        assert report["sizeBound"]["count"] == 0
        assert report["conservation"]["modulesBefore"] == 400
        assert report["conservation"]["missing"] == []
        assert report["asyncParts"] == {"count": 1, "names": ["lazy-part-1"]}

    def test_no_pieces(self, graph, make_chunk):
        main = make_chunk("main", count=3)
        before = capture_membership([main])

        report = build_split_assurance(before, [main], [], SplitOptions())

        assert report["status"] == "PASS"
        assert report["chunkStats"]["created"] == 0
        assert report["chunkStats"]["median"] == 0

    def test_oversized_piece_fails(self, graph, make_chunk):
        main = make_chunk("main", count=4, entry=True)
        before = capture_membership([main])
        target = graph.add_chunk("main-part-1")
        for module in main.modules[1:]:
            graph.disconnect(module, main)
            graph.connect(module, target)
        piece = SplitPiece(source=main, index=0, modules=target.modules, chunk=target)

        report = build_split_assurance(
            before, [main], [piece], SplitOptions(max_modules_per_chunk=1)
        )

        assert report["status"] == "FAIL"
        assert report["sizeBound"]["examples"][0] == {
            "chunk": "main-part-1",
            "source": "main",
            "modules": 3,
            "limit": 1,
        }

    def test_lost_module_fails(self, graph, make_chunk):
        main = make_chunk("main", count=3)
        before = capture_membership([main])
        lost = main.modules[-1]
        graph.disconnect(lost, main)

        report = build_split_assurance(before, [main], [], SplitOptions())

        assert report["status"] == "FAIL"
        assert report["conservation"]["missing"] == [lost.id]

    def test_entry_limit_applies_to_entry_part_only(self, graph, make_chunk):
        main = make_chunk("main", count=30, entry=True)
        before = capture_membership([main])
        options = SplitOptions(max_modules_per_chunk=10, max_modules_per_entry=0)

        pieces = split_chunks([main], graph, options)
        report = build_split_assurance(before, [main], pieces, options)

        assert [p.chunk.module_count for p in pieces] == [10, 10]
        assert report["sizeBound"]["count"] == 0
        assert report["status"] == "PASS"
