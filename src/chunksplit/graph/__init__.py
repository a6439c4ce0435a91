"""
Chunk graph model used by the build pipeline.
"""

from .compilation import ChunkGraph
from .model import Block, Chunk, Entrypoint, Module, Origin

__all__ = ["Block", "Chunk", "ChunkGraph", "Entrypoint", "Module", "Origin"]
