"""
Build pipeline: phases, build sessions and the runner that drives hooks.
"""

from .dag import DEFAULT_PHASES, OPTIMIZE_PHASES, validate_phases
from .runner import run
from .session import BuildSession, Hooks

__all__ = [
    "BuildSession",
    "DEFAULT_PHASES",
    "Hooks",
    "OPTIMIZE_PHASES",
    "run",
    "validate_phases",
]
