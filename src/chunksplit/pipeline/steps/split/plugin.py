"""
Hook the chunk splitter into a build session.
"""

import itertools
from typing import List, Optional

from ....core.logging import log
from ....graph.model import Chunk
from ...session import BuildSession
from .assurance import build_split_assurance, capture_membership
from .orchestrator import split_chunks
from .strategy import SplitOptions

SPLIT_PHASES = ("optimize-chunks", "optimize-extracted-chunks")

_next_ident = itertools.count()


class ChunkSplittingPlugin:
    """Split oversized chunks once per build, during chunk optimization."""

    def __init__(self, options: Optional[SplitOptions] = None):
        self.ident = f"{__name__}/{next(_next_ident)}"
        self.options = options or SplitOptions()

    def apply(self, session: BuildSession) -> None:
        for phase in SPLIT_PHASES:
            session.hooks.tap(phase, self.optimize_chunks)

    def optimize_chunks(self, chunks: List[Chunk], session: BuildSession) -> Optional[bool]:
        # Split only once per build
        if not session.set_marker(self.ident):
            return None

        chunks = list(chunks)
        before = capture_membership(chunks)
        pieces = split_chunks(chunks, session.graph, self.options)

        report = build_split_assurance(before, chunks, pieces, self.options)
        session.reports[self.ident] = report
        log.info(
            "split.assurance",
            build_id=session.build_id,
            created=report["chunkStats"]["created"],
            status=report["status"],
        )
        return bool(pieces)
