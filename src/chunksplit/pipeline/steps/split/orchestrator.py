"""
Split pass over a list of chunks.

A pass is planned completely before the graph is touched: options are
validated, every module group is computed against a simulated copy of the
membership, and the single-parent precondition of synchronous splits is
checked. Only then are chunks created and relinked, so a failing pass leaves
the graph unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set

from ....core.errors import ExternalParentError, SplitError
from ....core.logging import log
from ....graph.compilation import ChunkGraph
from ....graph.model import Chunk, Module
from .ownership import extract_modules_and_return_affected_chunks
from .relink import make_target_chunk_parent_of_affected_chunks, relink_async
from .strategy import SplitOptions


class SplitState(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
    PER_CHUNK_PARTITION = "per_chunk_partition"
    RELINKING = "relinking"
    DONE = "done"


@dataclass
class SplitPiece:
    """One group of modules leaving ``source`` for a new chunk."""

    source: Chunk
    index: int
    modules: List[Module]
    affected: List[Chunk] = field(default_factory=list)
    chunk: Optional[Chunk] = None
    entry_part: bool = False  # sized by max_modules_per_entry

    @property
    def is_async(self) -> bool:
        return not self.source.initial


class SplitPass:
    """A single, non re-entrant split of ``chunks_to_split`` inside ``graph``."""

    def __init__(
        self,
        chunks_to_split: Sequence[Chunk],
        graph: ChunkGraph,
        options: Optional[SplitOptions] = None,
    ):
        self.graph = graph
        self.options = (options or SplitOptions()).validate()
        self.chunks_to_split = list(chunks_to_split)
        self.state = SplitState.IDLE
        self.candidates: List[Chunk] = []
        self.pieces: List[SplitPiece] = []

    def _enter(self, state: SplitState) -> None:
        log.debug("split.state", previous=self.state.value, state=state.value)
        self.state = state

    def filter(self) -> List[Chunk]:
        self._enter(SplitState.FILTERING)
        self.candidates = []
        for chunk in self.chunks_to_split:
            if not chunk.module_count:
                continue
            if not self.options.filter_predicate(chunk):
                log.debug("split.skip", chunk=chunk.display_name, reason="filtered")
                continue
            self.candidates.append(chunk)
        return self.candidates

    def plan(self) -> List[SplitPiece]:
        """Compute every piece without mutating the graph."""
        self._enter(SplitState.PER_CHUNK_PARTITION)
        order: Dict[Chunk, int] = {}
        for chunk in self.chunks_to_split:
            order.setdefault(chunk, len(order))
        remaining: Dict[Chunk, Dict[Module, None]] = {
            chunk: dict.fromkeys(chunk.modules) for chunk in order
        }
        owners: Dict[Module, Set[Chunk]] = {}
        for members in remaining.values():
            for module in members:
                if module not in owners:
                    owners[module] = {c for c in module.chunks if c in order}
        pieces: List[SplitPiece] = []

        for chunk in self.candidates:
            module_count = len(remaining[chunk])
            groups = self.options.segregator(
                list(remaining[chunk]), chunk.entry, self.options
            )
            groups = [group for group in groups if group]
            if not groups:
                log.debug(
                    "split.skip",
                    chunk=chunk.display_name,
                    modules=module_count,
                    reason="within_limit",
                )
                continue

            # The default segregator drops the entry group when the entry limit is 0
            has_entry_part = chunk.entry and self.options.max_modules_per_entry > 0
            for index, group in enumerate(groups):
                affected: Set[Chunk] = set()
                for module in group:
                    holders = owners.get(module, set())
                    for other in holders:
                        del remaining[other][module]
                    affected |= holders
                    owners[module] = set()
                pieces.append(
                    SplitPiece(
                        source=chunk,
                        index=index,
                        modules=list(group),
                        affected=sorted(affected, key=order.__getitem__),
                        entry_part=has_entry_part and index == 0,
                    )
                )

            log.info(
                "split.chunk",
                chunk=chunk.display_name,
                modules=module_count,
                parts=len(groups),
                part_sizes=[len(group) for group in groups],
                entry=chunk.entry,
                mode="async" if not chunk.initial else "sync",
            )

        self.pieces = pieces
        return pieces

    def check_parents(self) -> None:
        """Synchronous relinking overwrites parents; refuse to drop external ones."""
        if self.options.allow_parent_overwrite:
            return
        inside = set(self.chunks_to_split)
        for piece in self.pieces:
            if piece.is_async:
                continue
            for chunk in piece.affected:
                external = [parent for parent in chunk.parents if parent not in inside]
                if external:
                    raise ExternalParentError(
                        f"Chunk {chunk.display_name} has parents outside the chunks "
                        f"being split ({', '.join(p.display_name for p in external)}); "
                        "splitting it would replace them",
                        chunk=chunk,
                        parents=external,
                    )

    def apply(self) -> List[SplitPiece]:
        self._enter(SplitState.RELINKING)
        previous: Dict[Chunk, Chunk] = {}

        for piece in self.pieces:
            source = piece.source
            target = self.graph.add_chunk(
                self.options.naming_function(source, piece.index),
                initial=source.initial,
            )
            piece.chunk = target
            piece.affected = extract_modules_and_return_affected_chunks(
                self.graph, piece.modules, self.chunks_to_split, target
            )

            if piece.is_async:
                relink_async(source, piece.affected, self.chunks_to_split, target)
            else:
                make_target_chunk_parent_of_affected_chunks(
                    self.graph, piece.affected, target, previous.get(source)
                )
                previous[source] = target

        return self.pieces

    def run(self) -> List[SplitPiece]:
        if self.state is not SplitState.IDLE:
            raise SplitError("A split pass can only run once")
        self.filter()
        self.plan()
        self.check_parents()
        self.apply()
        self._enter(SplitState.DONE)
        log.info(
            "split.done",
            chunks=len(self.chunks_to_split),
            candidates=len(self.candidates),
            created=len(self.pieces),
        )
        return self.pieces


def split_chunks(
    chunks_to_split: Sequence[Chunk],
    graph: ChunkGraph,
    options: Optional[SplitOptions] = None,
) -> List[SplitPiece]:
    """Run a split pass and return the applied pieces."""
    return SplitPass(chunks_to_split, graph, options).run()


def break_chunks_into_pieces(
    chunks_to_split: Sequence[Chunk],
    graph: ChunkGraph,
    options: Optional[SplitOptions] = None,
) -> List[Chunk]:
    """
    Split every oversized chunk of ``chunks_to_split`` into bounded parts.

    Args:
        chunks_to_split: Chunks under consideration, in graph order
        graph: Graph owning the chunks; new chunks are created in it
        options: Split options (defaults: 100 modules per chunk, 1 per entry)

    Returns:
        Newly created chunks in creation order; empty when nothing changed

    Raises:
        InvalidConfiguration: options are unusable; the graph is unchanged
        ExternalParentError: a synchronous split would drop foreign parents
    """
    return [piece.chunk for piece in split_chunks(chunks_to_split, graph, options)]
