"""Tests for the chunk graph model."""

import pytest

from chunksplit.core.errors import GraphError
from chunksplit.graph import ChunkGraph, Origin

pytestmark = pytest.mark.unit


class TestChunkGraph:
    """Test the arena and its single-writer relations."""

    def test_ids_are_stable_and_unique(self, graph):
        a = graph.add_chunk("a")
        b = graph.add_chunk("b")

        assert a.id != b.id
        assert graph.get_chunk(a.id) is a
        assert graph.chunk_named("b") is b
        assert graph.chunk_named("missing") is None

    def test_explicit_ids(self):
        graph = ChunkGraph()
        graph.add_chunk("a", id=0)
        auto = graph.add_chunk("b")

        assert auto.id == 1
        with pytest.raises(GraphError, match="Duplicate id"):
            graph.add_chunk("c", id=1)

    def test_unknown_ids(self, graph):
        with pytest.raises(GraphError):
            graph.get_chunk(42)
        with pytest.raises(GraphError):
            graph.get_module(42)

    def test_connect_is_mirrored_and_idempotent(self, graph):
        module = graph.add_module("m")
        chunk = graph.add_chunk("c")

        assert graph.connect(module, chunk) is True
        assert graph.connect(module, chunk) is False
        assert chunk.modules == [module]
        assert module.chunks == [chunk]
        assert module.in_chunk(chunk)

    def test_disconnect_non_member_is_noop(self, graph):
        module = graph.add_module("m")
        chunk = graph.add_chunk("c")

        assert graph.disconnect(module, chunk) is False
        graph.connect(module, chunk)
        assert graph.disconnect(module, chunk) is True
        assert chunk.modules == []
        assert module.chunks == []

    def test_module_order_is_insertion_order(self, graph):
        chunk = graph.add_chunk("c")
        modules = [graph.add_module(name) for name in ("z", "a", "m")]
        for module in modules:
            graph.connect(module, chunk)

        assert chunk.modules == modules

    def test_edges(self, graph):
        parent = graph.add_chunk("p")
        child = graph.add_chunk("c")

        assert graph.add_edge(parent, child) is True
        assert graph.add_edge(parent, child) is False
        assert child.parents == [parent]
        assert parent.children == [child]
        with pytest.raises(GraphError):
            graph.add_edge(child, child)

    def test_set_only_parent(self, graph):
        old_a = graph.add_chunk("a")
        old_b = graph.add_chunk("b")
        child = graph.add_chunk("c")
        new = graph.add_chunk("n")
        graph.add_edge(old_a, child)
        graph.add_edge(old_b, child)

        graph.set_only_parent(child, new)

        assert child.parents == [new]
        assert new.children == [child]
        assert old_a.children == []
        assert old_b.children == []

    def test_add_block_registers_on_chunks(self, graph):
        site = graph.add_module("site")
        a = graph.add_chunk("a", initial=False)
        b = graph.add_chunk("b", initial=False)

        block = graph.add_block(site, [a, b, a])

        assert block.chunks == [a, b]
        assert a.blocks == [block]
        assert b.blocks == [block]
        assert block.module is site


class TestEntities:
    """Test entity helpers."""

    def test_block_prepend_chunk(self, graph):
        a = graph.add_chunk("a")
        b = graph.add_chunk("b")
        block = graph.add_block(None, [a])

        assert block.prepend_chunk(b) is True
        assert block.prepend_chunk(b) is False
        assert block.chunks == [b, a]

    def test_origin_with_reason_is_a_copy(self):
        origin = Origin(location="1:0", reasons=("import()",))

        copied = origin.with_reason("async split main")

        assert copied.reasons == ("import()", "async split main")
        assert origin.reasons == ("import()",)
        assert copied.location == "1:0"

    def test_register_chunk(self, graph):
        a = graph.add_chunk("a")
        b = graph.add_chunk("b")

        assert a.register_chunk(b) is True
        assert a.register_chunk(b) is False
        assert a.register_chunk(a) is False
        assert a.reachable_chunks == [b]

    def test_display_name(self, graph):
        assert graph.add_chunk("named").display_name == "named"
        unnamed = graph.add_chunk()
        assert unnamed.display_name == str(unnamed.id)

    def test_repr_does_not_recurse(self, graph):
        a = graph.add_chunk("a")
        b = graph.add_chunk("b")
        graph.add_edge(a, b)

        assert repr(a) == "Chunk(id=0, name='a', modules=0, initial=True)"


class TestEntrypoint:
    """Test entrypoint load order edits."""

    def test_insert_before(self, graph):
        a, b, new = (graph.add_chunk(n) for n in "abn")
        entrypoint = graph.add_entrypoint("main", [a, b])

        entrypoint.insert_before(b, new)

        assert entrypoint.chunks == [a, new, b]

    def test_insert_before_existing_ahead_is_noop(self, graph):
        a, b = graph.add_chunk("a"), graph.add_chunk("b")
        entrypoint = graph.add_entrypoint("main", [a, b])

        entrypoint.insert_before(b, a)

        assert entrypoint.chunks == [a, b]

    def test_insert_before_moves_later_chunk(self, graph):
        a, b = graph.add_chunk("a"), graph.add_chunk("b")
        entrypoint = graph.add_entrypoint("main", [a, b])

        entrypoint.insert_before(a, b)

        assert entrypoint.chunks == [b, a]

    def test_insert_before_missing_chunk(self, graph):
        a, b = graph.add_chunk("a"), graph.add_chunk("b")
        entrypoint = graph.add_entrypoint("main", [a])

        with pytest.raises(GraphError):
            entrypoint.insert_before(b, a)

    def test_duplicate_entrypoint(self, graph):
        graph.add_entrypoint("main")

        with pytest.raises(GraphError):
            graph.add_entrypoint("main")

    def test_entrypoints_containing(self, graph):
        a = graph.add_chunk("a")
        main = graph.add_entrypoint("main", [a])
        graph.add_entrypoint("admin", [])

        assert graph.entrypoints_containing(a) == [main]
