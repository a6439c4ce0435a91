"""chunksplit - rebalance oversized chunks of a module graph into bounded parts."""

__version__ = "0.3.0"

from .core.errors import (
    ExternalParentError,
    GraphError,
    InvalidConfiguration,
    SplitError,
)
from .graph import Block, Chunk, ChunkGraph, Entrypoint, Module, Origin
from .pipeline.steps.split import (
    ChunkSplittingPlugin,
    SplitOptions,
    break_chunks_into_pieces,
)

__all__ = [
    "__version__",
    "Block",
    "Chunk",
    "ChunkGraph",
    "ChunkSplittingPlugin",
    "Entrypoint",
    "ExternalParentError",
    "GraphError",
    "InvalidConfiguration",
    "Module",
    "Origin",
    "SplitError",
    "SplitOptions",
    "break_chunks_into_pieces",
]
