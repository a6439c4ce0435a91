"""
Move modules from the chunks being split into a new chunk.
"""

from typing import Dict, List, Sequence

from ....graph.compilation import ChunkGraph
from ....graph.model import Chunk, Module


def extract_modules_and_return_affected_chunks(
    graph: ChunkGraph,
    modules: Sequence[Module],
    chunks: Sequence[Chunk],
    target: Chunk,
) -> List[Chunk]:
    """
    Re-own ``modules`` to ``target``.

    Each module is removed from every chunk of ``chunks`` holding it, then
    added to ``target``. Removing a module from a chunk it is not in is a
    no-op.

    Returns:
        Chunks that actually lost a module, in the order of ``chunks``
    """
    affected: Dict[Chunk, None] = {}
    for module in modules:
        for chunk in chunks:
            if graph.disconnect(module, chunk):
                affected[chunk] = None

    for module in modules:
        graph.connect(module, target)

    order = {chunk: i for i, chunk in enumerate(chunks)}
    return sorted(affected, key=order.__getitem__)
