"""Exception hierarchy for the chunk splitter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..graph.model import Chunk


class SplitError(Exception):
    """Base exception for all splitter errors."""

    pass


class InvalidConfiguration(SplitError):
    """Split options are unusable.

    Raised before any chunk of the graph is touched.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ExternalParentError(SplitError):
    """A chunk that would get a synthetic sole parent has other parents.

    Overwriting the parents of such a chunk would drop load-order edges
    that do not come from the chunks being split.
    """

    def __init__(
        self,
        message: str,
        chunk: Chunk | None = None,
        parents: Sequence[Chunk] = (),
    ) -> None:
        super().__init__(message)
        self.chunk = chunk
        self.parents = list(parents)


class GraphError(SplitError):
    """The host graph was used inconsistently."""

    pass
