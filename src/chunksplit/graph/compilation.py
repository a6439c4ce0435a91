"""
In-memory chunk graph owned by the build.

``ChunkGraph`` is an arena: it allocates ids, keeps every module, chunk,
block and entrypoint reachable by id, and is the only writer of the
module/chunk membership relation and of parent/child edges.
"""

from __future__ import annotations

import itertools
from typing import Dict, Iterable, Iterator, List, Optional

from ..core.errors import GraphError
from .model import Block, Chunk, Entrypoint, Module, Origin


class ChunkGraph:
    def __init__(self) -> None:
        self.modules: Dict[int, Module] = {}
        self.chunks: List[Chunk] = []
        self.blocks: Dict[int, Block] = {}
        self.entrypoints: Dict[str, Entrypoint] = {}
        self._chunks_by_id: Dict[int, Chunk] = {}
        self._module_ids = itertools.count()
        self._chunk_ids = itertools.count()
        self._block_ids = itertools.count()

    # -- allocation -------------------------------------------------------

    @staticmethod
    def _next_id(counter: Iterator[int], taken: Iterable[int], requested: Optional[int]) -> int:
        taken = set(taken)
        if requested is not None:
            if requested in taken:
                raise GraphError(f"Duplicate id {requested}")
            return requested
        while True:
            candidate = next(counter)
            if candidate not in taken:
                return candidate

    def add_module(self, name: str, id: Optional[int] = None) -> Module:
        module_id = self._next_id(self._module_ids, self.modules, id)
        module = Module(id=module_id, name=name)
        self.modules[module_id] = module
        return module

    def add_chunk(
        self,
        name: Optional[str] = None,
        *,
        initial: bool = True,
        entry: bool = False,
        id: Optional[int] = None,
    ) -> Chunk:
        """Allocate a new empty chunk. An unnamed chunk is legal."""
        chunk_id = self._next_id(self._chunk_ids, self._chunks_by_id, id)
        chunk = Chunk(id=chunk_id, name=name, initial=initial, entry=entry)
        self.chunks.append(chunk)
        self._chunks_by_id[chunk_id] = chunk
        return chunk

    def add_block(
        self,
        module: Optional[Module] = None,
        chunks: Iterable[Chunk] = (),
        id: Optional[int] = None,
    ) -> Block:
        """Create a lazy-load site loading ``chunks``; each chunk owns the block."""
        block_id = self._next_id(self._block_ids, self.blocks, id)
        block = Block(id=block_id, module=module)
        for chunk in chunks:
            if chunk not in block.chunks:
                block.chunks.append(chunk)
            chunk.add_block(block)
        self.blocks[block_id] = block
        return block

    def add_entrypoint(self, name: str, chunks: Iterable[Chunk] = ()) -> Entrypoint:
        if name in self.entrypoints:
            raise GraphError(f"Duplicate entrypoint {name!r}")
        entrypoint = Entrypoint(name=name, chunks=list(chunks))
        self.entrypoints[name] = entrypoint
        return entrypoint

    def add_origin(
        self,
        chunk: Chunk,
        module: Optional[Module] = None,
        location: Optional[str] = None,
        reasons: Iterable[str] = (),
    ) -> Origin:
        origin = Origin(module=module, location=location, reasons=tuple(reasons))
        chunk.add_origin(origin)
        return origin

    # -- lookup -----------------------------------------------------------

    def get_chunk(self, chunk_id: int) -> Chunk:
        try:
            return self._chunks_by_id[chunk_id]
        except KeyError:
            raise GraphError(f"Unknown chunk id {chunk_id}") from None

    def get_module(self, module_id: int) -> Module:
        try:
            return self.modules[module_id]
        except KeyError:
            raise GraphError(f"Unknown module id {module_id}") from None

    def chunk_named(self, name: str) -> Optional[Chunk]:
        for chunk in self.chunks:
            if chunk.name == name:
                return chunk
        return None

    def entrypoints_containing(self, chunk: Chunk) -> List[Entrypoint]:
        return [ep for ep in self.entrypoints.values() if chunk in ep]

    # -- membership (sole writer) ----------------------------------------

    def connect(self, module: Module, chunk: Chunk) -> bool:
        """Add ``module`` to ``chunk`` on both sides. Returns False if already there."""
        if chunk.has_module(module):
            return False
        chunk._modules[module] = None
        module._chunks[chunk] = None
        return True

    def disconnect(self, module: Module, chunk: Chunk) -> bool:
        """Remove ``module`` from ``chunk`` on both sides. A non-member is a no-op."""
        if not chunk.has_module(module):
            return False
        del chunk._modules[module]
        del module._chunks[chunk]
        return True

    # -- edges ------------------------------------------------------------

    def add_edge(self, parent: Chunk, child: Chunk) -> bool:
        if parent is child:
            raise GraphError(f"Chunk {parent.display_name} cannot be its own parent")
        added = False
        if parent not in child.parents:
            child.parents.append(parent)
            added = True
        if child not in parent.children:
            parent.children.append(child)
            added = True
        return added

    def set_only_parent(self, child: Chunk, parent: Chunk) -> None:
        """Replace every parent of ``child`` with ``parent``."""
        for old in child.parents:
            if old is not parent and child in old.children:
                old.children.remove(child)
        child.parents = []
        self.add_edge(parent, child)

    def __repr__(self) -> str:
        return (
            f"ChunkGraph(modules={len(self.modules)}, chunks={len(self.chunks)}, "
            f"entrypoints={list(self.entrypoints)})"
        )
