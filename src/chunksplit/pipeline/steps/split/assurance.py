"""
Split assurance and quality reporting.
"""

import statistics
from collections import Counter
from typing import Dict, List, Sequence

from ....graph.model import Chunk
from .orchestrator import SplitPiece
from .strategy import SplitOptions


def capture_membership(chunks: Sequence[Chunk]) -> Dict[Chunk, List[int]]:
    """Snapshot module ids per chunk, taken before a split pass."""
    return {chunk: [module.id for module in chunk.modules] for chunk in chunks}


def build_split_assurance(
    before: Dict[Chunk, List[int]],
    chunks: Sequence[Chunk],
    pieces: Sequence[SplitPiece],
    options: SplitOptions,
) -> Dict:
    """
    Build an assurance report for one split pass.

    Args:
        before: Membership captured with ``capture_membership`` before the pass
        chunks: The chunks that were considered (same list as the pass)
        pieces: Pieces returned by ``split_chunks``
        options: Options the pass ran with

    Returns:
        Assurance report dictionary
    """
    limits = {
        "maxModulesPerChunk": options.max_modules_per_chunk,
        "maxModulesPerEntry": options.max_modules_per_entry,
    }
    created = [piece.chunk for piece in pieces if piece.chunk is not None]
    sizes = [chunk.module_count for chunk in created]

    breaches: List[Dict] = []
    for piece in pieces:
        if piece.chunk is None:
            continue
        limit = options.max_modules_per_chunk
        if piece.entry_part:
            limit = options.max_modules_per_entry
        if piece.chunk.module_count > limit:
            breaches.append(
                {
                    "chunk": piece.chunk.display_name,
                    "source": piece.source.display_name,
                    "modules": piece.chunk.module_count,
                    "limit": limit,
                }
            )
    sources = {piece.source for piece in pieces}
    for chunk in chunks:
        if chunk in sources and chunk.module_count > options.max_modules_per_chunk:
            breaches.append(
                {
                    "chunk": chunk.display_name,
                    "source": chunk.display_name,
                    "modules": chunk.module_count,
                    "limit": options.max_modules_per_chunk,
                }
            )

    # Every module held before the pass must be held exactly once by the
    # considered chunks or the pieces, and nothing else may appear.
    before_ids = {module_id for ids in before.values() for module_id in ids}
    after_ids: List[int] = []
    for chunk in list(chunks) + created:
        after_ids.extend(module.id for module in chunk.modules)
    moved_ids = [module.id for chunk in created for module in chunk.modules]
    missing = sorted(before_ids - set(after_ids))
    unexpected = sorted(set(after_ids) - before_ids)
    duplicated = sorted(i for i, n in Counter(moved_ids).items() if n > 1)

    async_parts = [chunk for chunk in created if chunk.extra_async]

    ok = not breaches and not missing and not unexpected and not duplicated
    return {
        "limits": limits,
        "chunkStats": {
            "considered": len(chunks),
            "created": len(created),
            "min": min(sizes) if sizes else 0,
            "median": statistics.median(sizes) if sizes else 0,
            "max": max(sizes) if sizes else 0,
        },
        "sizeBound": {"count": len(breaches), "examples": breaches[:10]},
        "conservation": {
            "modulesBefore": len(before_ids),
            "missing": missing[:20],
            "unexpected": unexpected[:20],
            "duplicated": duplicated[:20],
        },
        "asyncParts": {
            "count": len(async_parts),
            "names": [chunk.display_name for chunk in async_parts],
        },
        "status": "PASS" if ok else "FAIL",
    }
