"""
Chunk graph entities.

Entities are identity objects addressed by stable integer ids handed out by
``ChunkGraph``. Module/chunk membership is mirrored on both sides and is only
written through ``ChunkGraph.connect`` and ``ChunkGraph.disconnect``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.errors import GraphError


@dataclass(eq=False, repr=False)
class Module:
    """A unit of source content. Owned by the host; never created by a split."""

    id: int
    name: str
    _chunks: Dict["Chunk", None] = field(default_factory=dict)

    @property
    def chunks(self) -> List["Chunk"]:
        return list(self._chunks)

    def in_chunk(self, chunk: "Chunk") -> bool:
        return chunk in self._chunks

    def __repr__(self) -> str:
        return f"Module(id={self.id}, name={self.name!r})"


@dataclass(frozen=True)
class Origin:
    """Diagnostic record explaining why a chunk exists."""

    module: Optional[Module] = None
    location: Optional[str] = None
    reasons: Tuple[str, ...] = ()

    def with_reason(self, reason: str) -> "Origin":
        return dataclasses.replace(self, reasons=self.reasons + (reason,))


@dataclass(eq=False, repr=False)
class Block:
    """A lazy-load site: executing it loads every chunk in ``chunks``."""

    id: int
    module: Optional[Module] = None
    chunks: List["Chunk"] = field(default_factory=list)

    def prepend_chunk(self, chunk: "Chunk") -> bool:
        """Insert ``chunk`` at the front unless it is already listed."""
        if chunk in self.chunks:
            return False
        self.chunks.insert(0, chunk)
        return True

    def __repr__(self) -> str:
        return f"Block(id={self.id}, chunks={[c.id for c in self.chunks]})"


@dataclass(eq=False, repr=False)
class Chunk:
    """A deliverable group of modules.

    ``initial`` chunks load at startup, the others on demand through a block.
    ``entry`` chunks carry the runtime bootstrap. ``extra_async`` marks lazy
    chunks produced by a split rather than by the host.
    """

    id: int
    name: Optional[str] = None
    initial: bool = True
    entry: bool = False
    extra_async: bool = False
    parents: List["Chunk"] = field(default_factory=list)
    children: List["Chunk"] = field(default_factory=list)
    blocks: List[Block] = field(default_factory=list)
    origins: List[Origin] = field(default_factory=list)
    reachable_chunks: List["Chunk"] = field(default_factory=list)
    _modules: Dict[Module, None] = field(default_factory=dict)

    @property
    def modules(self) -> List[Module]:
        """Modules in insertion order."""
        return list(self._modules)

    @property
    def module_count(self) -> int:
        return len(self._modules)

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else str(self.id)

    def has_module(self, module: Module) -> bool:
        return module in self._modules

    def add_block(self, block: Block) -> bool:
        if block in self.blocks:
            return False
        self.blocks.append(block)
        return True

    def add_origin(self, origin: Origin) -> None:
        self.origins.append(origin)

    def register_chunk(self, chunk: "Chunk") -> bool:
        """Make ``chunk`` discoverable when enumerating chunks reachable from this one."""
        if chunk is self or chunk in self.reachable_chunks:
            return False
        self.reachable_chunks.append(chunk)
        return True

    def __repr__(self) -> str:
        return (
            f"Chunk(id={self.id}, name={self.name!r}, "
            f"modules={len(self._modules)}, initial={self.initial})"
        )


@dataclass(eq=False, repr=False)
class Entrypoint:
    """Named startup bundle; ``chunks`` is its load order."""

    name: str
    chunks: List[Chunk] = field(default_factory=list)

    def __contains__(self, chunk: Chunk) -> bool:
        return chunk in self.chunks

    def insert_before(self, existing: Chunk, new: Chunk) -> None:
        """Load ``new`` right before ``existing``.

        A chunk already loading ahead of ``existing`` stays where it is; one
        loading after it is moved in front of it.
        """
        if existing not in self.chunks:
            raise GraphError(
                f"Entrypoint {self.name!r} does not contain chunk {existing.display_name}"
            )
        if new in self.chunks:
            if self.chunks.index(new) < self.chunks.index(existing):
                return
            self.chunks.remove(new)
        self.chunks.insert(self.chunks.index(existing), new)

    def __repr__(self) -> str:
        return f"Entrypoint(name={self.name!r}, chunks={[c.id for c in self.chunks]})"
