"""
Decide which modules leave an oversized chunk and how they are grouped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from ....core.errors import InvalidConfiguration
from ....graph.model import Chunk, Module
from .partition import segregate, take_slice

if TYPE_CHECKING:
    from ....core.config import Settings

NamingFunction = Callable[[Chunk, int], Optional[str]]
FilterPredicate = Callable[[Chunk], bool]
Segregator = Callable[[Sequence[Module], bool, "SplitOptions"], List[List[Module]]]


def default_part_name(source: Chunk, index: int) -> Optional[str]:
    """``<name>-part-<n>`` with a 1-based ``n``; unnamed sources give unnamed parts."""
    if not source.name:
        return None
    return f"{source.name}-part-{index + 1}"


def _accept_all(chunk: Chunk) -> bool:
    return True


def segregate_modules(
    modules: Sequence[Module], is_entry: bool, options: "SplitOptions"
) -> List[List[Module]]:
    """
    Group the modules to extract from a chunk.

    The first ``max_modules_per_chunk`` modules always stay in the chunk.
    From the remaining tail, the first group is sized by the threshold
    (``max_modules_per_entry`` for entry chunks) and the rest is cut into
    groups of ``max_modules_per_chunk``.

    Args:
        modules: Modules of the chunk in insertion order
        is_entry: Whether the chunk carries the runtime
        options: Split options

    Returns:
        Disjoint, non-empty groups; an empty list leaves the chunk untouched
    """
    max_per_chunk = options.max_modules_per_chunk
    threshold = options.max_modules_per_entry if is_entry else max_per_chunk

    if len(modules) <= threshold:
        return []

    extractable = take_slice(modules, max_per_chunk)
    groups = [take_slice(extractable, 0, threshold)]
    groups.extend(segregate(take_slice(extractable, threshold), max_per_chunk))
    return [group for group in groups if group]


@dataclass
class SplitOptions:
    """Options of one split pass."""

    max_modules_per_chunk: int = 100
    max_modules_per_entry: int = 1
    naming_function: NamingFunction = default_part_name
    filter_predicate: FilterPredicate = _accept_all
    segregator: Segregator = segregate_modules
    allow_parent_overwrite: bool = False

    def validate(self) -> "SplitOptions":
        def _is_int(value: object) -> bool:
            return isinstance(value, int) and not isinstance(value, bool)

        if not _is_int(self.max_modules_per_chunk) or self.max_modules_per_chunk <= 0:
            raise InvalidConfiguration(
                "max_modules_per_chunk must be greater than or equal to 1, "
                f"got {self.max_modules_per_chunk!r}",
                field="max_modules_per_chunk",
            )
        if not _is_int(self.max_modules_per_entry) or self.max_modules_per_entry < 0:
            raise InvalidConfiguration(
                "max_modules_per_entry must be greater than or equal to 0, "
                f"got {self.max_modules_per_entry!r}",
                field="max_modules_per_entry",
            )
        for name in ("naming_function", "filter_predicate", "segregator"):
            if not callable(getattr(self, name)):
                raise InvalidConfiguration(f"{name} must be callable", field=name)
        return self

    @classmethod
    def from_settings(cls, settings: "Settings", **overrides) -> "SplitOptions":
        """Build options from settings; keyword overrides win when not None."""
        template = settings.SPLIT_PART_NAME_TEMPLATE

        def _templated_name(source: Chunk, index: int) -> Optional[str]:
            if not source.name:
                return None
            return template.format(name=source.name, index=index + 1, id=source.id)

        values = {
            "max_modules_per_chunk": settings.SPLIT_MAX_MODULES_PER_CHUNK,
            "max_modules_per_entry": settings.SPLIT_MAX_MODULES_PER_ENTRY,
            "naming_function": _templated_name,
            "allow_parent_overwrite": settings.SPLIT_ALLOW_PARENT_OVERWRITE,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
