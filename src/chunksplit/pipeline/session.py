"""Build session: the graph of one build plus the hooks and markers around it."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..core.artifacts import new_build_id
from ..graph.compilation import ChunkGraph
from ..graph.model import Chunk
from .dag import validate_phases

HookCallback = Callable[[List[Chunk], "BuildSession"], Any]


class Hooks:
    """Callbacks tapped per phase, called in registration order."""

    def __init__(self) -> None:
        self._taps: Dict[str, List[HookCallback]] = {}

    def tap(self, phase: str, callback: HookCallback) -> None:
        validate_phases([phase])
        self._taps.setdefault(phase, []).append(callback)

    def callbacks(self, phase: str) -> List[HookCallback]:
        return list(self._taps.get(phase, []))


class BuildSession:
    def __init__(self, graph: ChunkGraph, build_id: Optional[str] = None):
        self.graph = graph
        self.build_id = build_id or new_build_id()
        self.hooks = Hooks()
        self.reports: Dict[str, Any] = {}
        self.current_phase: Optional[str] = None
        self._markers: set[str] = set()

    def chunks(self) -> List[Chunk]:
        """Snapshot of the graph's chunk list."""
        return list(self.graph.chunks)

    # One-shot guards for plugins that must run once per build

    def has_marker(self, ident: str) -> bool:
        return ident in self._markers

    def set_marker(self, ident: str) -> bool:
        """Set ``ident``; False when it was already set."""
        if ident in self._markers:
            return False
        self._markers.add(ident)
        return True
