"""
Chunk splitting step for the build pipeline.

This package rebalances oversized chunks with:
- Bounded grouping of a chunk's modules (entry chunks get their own head size)
- Module re-ownership that keeps module/chunk membership mirrored
- Synchronous relinking (sole synthetic parent, entrypoint load order)
- Asynchronous relinking (blocks, origins, chunk maps)
- Assurance reporting on size bounds and module conservation
"""

from .assurance import build_split_assurance, capture_membership
from .orchestrator import (
    SplitPass,
    SplitPiece,
    SplitState,
    break_chunks_into_pieces,
    split_chunks,
)
from .ownership import extract_modules_and_return_affected_chunks
from .partition import segregate, take_slice
from .plugin import ChunkSplittingPlugin
from .relink import make_target_chunk_parent_of_affected_chunks, relink_async
from .strategy import SplitOptions, default_part_name, segregate_modules

__all__ = [
    "ChunkSplittingPlugin",
    "SplitOptions",
    "SplitPass",
    "SplitPiece",
    "SplitState",
    "break_chunks_into_pieces",
    "build_split_assurance",
    "capture_membership",
    "default_part_name",
    "extract_modules_and_return_affected_chunks",
    "make_target_chunk_parent_of_affected_chunks",
    "relink_async",
    "segregate",
    "segregate_modules",
    "split_chunks",
    "take_slice",
]
