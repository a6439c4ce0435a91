"""
Bounded grouping of ordered collections.
"""

from typing import List, Optional, Sequence, TypeVar

from ....core.errors import InvalidConfiguration

T = TypeVar("T")


def segregate(items: Sequence[T], group_size: int) -> List[List[T]]:
    """Split ``items`` into consecutive groups of ``group_size``.

    Every group is full except possibly the last, which is never empty.
    Relative order is preserved.
    """
    if not isinstance(group_size, int) or isinstance(group_size, bool) or group_size <= 0:
        raise InvalidConfiguration(
            f"group size must be a positive integer, got {group_size!r}",
            field="group_size",
        )
    return [list(items[i : i + group_size]) for i in range(0, len(items), group_size)]


def take_slice(items: Sequence[T], skip: int, count: Optional[int] = None) -> List[T]:
    """Copy of ``items[skip:skip + count]`` (to the end when ``count`` is None)."""
    end = None if count is None else skip + count
    return list(items[skip:end])
