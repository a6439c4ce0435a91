"""
JSON graph descriptions.

A description lists modules, chunks (with module ids in order, parent ids,
flags and origins), blocks and entrypoints. ``build_graph`` turns it into a
``ChunkGraph``; ``dump_graph`` produces the same schema back, ids preserved.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..core.errors import GraphError
from .compilation import ChunkGraph
from .model import Chunk


class ModuleSpec(BaseModel):
    id: int
    name: str


class OriginSpec(BaseModel):
    module: Optional[int] = None  # module id
    location: Optional[str] = None
    reasons: List[str] = []


class ChunkSpec(BaseModel):
    id: int
    name: Optional[str] = None
    initial: bool = True
    entry: bool = False
    extra_async: bool = Field(default=False, alias="extraAsync")
    modules: List[int] = []  # ordered module ids
    parents: List[int] = []
    origins: List[OriginSpec] = []
    reachable: List[int] = []  # chunks registered for chunk maps

    model_config = {"populate_by_name": True}


class BlockSpec(BaseModel):
    id: int
    module: Optional[int] = None
    chunks: List[int] = []


class EntrypointSpec(BaseModel):
    name: str
    chunks: List[int] = []


class GraphDescription(BaseModel):
    modules: List[ModuleSpec] = []
    chunks: List[ChunkSpec] = []
    blocks: List[BlockSpec] = []
    entrypoints: List[EntrypointSpec] = []


def build_graph(description: Union[GraphDescription, Dict[str, Any]]) -> ChunkGraph:
    """Create a graph from a description; unknown ids raise ``GraphError``."""
    if not isinstance(description, GraphDescription):
        try:
            description = GraphDescription.model_validate(description)
        except ValidationError as e:
            raise GraphError(f"Invalid graph description: {e}") from e

    graph = ChunkGraph()
    for module_spec in description.modules:
        graph.add_module(module_spec.name, id=module_spec.id)

    for chunk_spec in description.chunks:
        chunk = graph.add_chunk(
            chunk_spec.name,
            initial=chunk_spec.initial,
            entry=chunk_spec.entry,
            id=chunk_spec.id,
        )
        chunk.extra_async = chunk_spec.extra_async
        for module_id in chunk_spec.modules:
            graph.connect(graph.get_module(module_id), chunk)

    for chunk_spec in description.chunks:
        chunk = graph.get_chunk(chunk_spec.id)
        for parent_id in chunk_spec.parents:
            graph.add_edge(graph.get_chunk(parent_id), chunk)
        for reachable_id in chunk_spec.reachable:
            chunk.register_chunk(graph.get_chunk(reachable_id))
        for origin_spec in chunk_spec.origins:
            graph.add_origin(
                chunk,
                module=graph.get_module(origin_spec.module) if origin_spec.module is not None else None,
                location=origin_spec.location,
                reasons=origin_spec.reasons,
            )

    for block_spec in description.blocks:
        graph.add_block(
            module=graph.get_module(block_spec.module) if block_spec.module is not None else None,
            chunks=[graph.get_chunk(chunk_id) for chunk_id in block_spec.chunks],
            id=block_spec.id,
        )

    for entrypoint_spec in description.entrypoints:
        graph.add_entrypoint(
            entrypoint_spec.name,
            [graph.get_chunk(chunk_id) for chunk_id in entrypoint_spec.chunks],
        )

    return graph


def _chunk_spec(chunk: Chunk) -> ChunkSpec:
    return ChunkSpec(
        id=chunk.id,
        name=chunk.name,
        initial=chunk.initial,
        entry=chunk.entry,
        extra_async=chunk.extra_async,
        modules=[module.id for module in chunk.modules],
        parents=[parent.id for parent in chunk.parents],
        origins=[
            OriginSpec(
                module=origin.module.id if origin.module is not None else None,
                location=origin.location,
                reasons=list(origin.reasons),
            )
            for origin in chunk.origins
        ],
        reachable=[other.id for other in chunk.reachable_chunks],
    )


def describe_graph(graph: ChunkGraph) -> GraphDescription:
    return GraphDescription(
        modules=[ModuleSpec(id=m.id, name=m.name) for m in graph.modules.values()],
        chunks=[_chunk_spec(chunk) for chunk in graph.chunks],
        blocks=[
            BlockSpec(
                id=block.id,
                module=block.module.id if block.module is not None else None,
                chunks=[chunk.id for chunk in block.chunks],
            )
            for block in graph.blocks.values()
        ],
        entrypoints=[
            EntrypointSpec(name=ep.name, chunks=[chunk.id for chunk in ep.chunks])
            for ep in graph.entrypoints.values()
        ],
    )


def dump_graph(graph: ChunkGraph) -> Dict[str, Any]:
    return describe_graph(graph).model_dump(by_alias=True)


def load_graph(path: Union[str, Path]) -> ChunkGraph:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphError(f"{path}: not valid JSON: {e}") from e
    return build_graph(data)


def write_graph(graph: ChunkGraph, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dump_graph(graph), f, indent=2)
        f.write("\n")
    return path
