"""
Re-link the chunk graph around a freshly extracted chunk.

Initial chunks are relinked synchronously: the new chunk becomes the sole
parent of every chunk that lost modules and loads right before it in each
entrypoint. Lazy chunks are relinked asynchronously: the blocks that loaded
the affected chunks now also load the new chunk.
"""

from typing import Optional, Sequence

from ....core.logging import log
from ....graph.compilation import ChunkGraph
from ....graph.model import Chunk

ASYNC_SPLIT_REASON = "async split {name}"


def make_target_chunk_parent_of_affected_chunks(
    graph: ChunkGraph,
    affected: Sequence[Chunk],
    target: Chunk,
    previous: Optional[Chunk] = None,
) -> None:
    """Synchronous relink; ``previous`` is the last part made from the same source."""
    if previous is not None:
        graph.add_edge(previous, target)

    for chunk in affected:
        if chunk is target:
            continue
        graph.set_only_parent(chunk, target)
        for entrypoint in graph.entrypoints_containing(chunk):
            entrypoint.insert_before(chunk, target)


def move_extracted_chunk_blocks_to_target_chunk(
    affected: Sequence[Chunk], target: Chunk
) -> int:
    """Make every block loading an affected chunk load ``target`` first.

    Returns the number of blocks that gained a reference.
    """
    added = 0
    for chunk in affected:
        if chunk is target:
            continue
        for block in chunk.blocks:
            if block.prepend_chunk(target):
                added += 1
            target.add_block(block)
    return added


def extract_origins_of_chunks_with_extracted_modules(
    affected: Sequence[Chunk], target: Chunk, reason: str
) -> None:
    for chunk in affected:
        if chunk is target:
            continue
        for origin in chunk.origins:
            target.add_origin(origin.with_reason(reason))


def relink_async(
    source: Chunk,
    affected: Sequence[Chunk],
    chunks_to_split: Sequence[Chunk],
    target: Chunk,
) -> None:
    """Asynchronous relink. Ancestry is left alone and parts are not chained."""
    target.extra_async = True
    blocks = move_extracted_chunk_blocks_to_target_chunk(affected, target)
    extract_origins_of_chunks_with_extracted_modules(
        affected, target, ASYNC_SPLIT_REASON.format(name=source.display_name)
    )

    # Listed on every chunk so runtime chunk maps include it
    for chunk in chunks_to_split:
        chunk.register_chunk(target)

    log.debug(
        "split.relink.async",
        source=source.display_name,
        target=target.display_name,
        blocks=blocks,
        origins=len(target.origins),
    )
