from typing import List, Optional, TYPE_CHECKING

from ..core.logging import log
from .dag import DEFAULT_PHASES, OPTIMIZE_PHASES, validate_phases
from .session import BuildSession

if TYPE_CHECKING:
    from ..core.config import Settings


def run(
    session: BuildSession,
    phases: Optional[List[str]] = None,
    max_optimize_passes: Optional[int] = None,
    settings: Optional["Settings"] = None,
) -> BuildSession:
    """
    Drive a build session through its phases.

    Optimize phases are repeated while any callback reports a change, up to
    ``max_optimize_passes`` (default ``PIPELINE_MAX_OPTIMIZE_PASSES``).
    """
    phases = validate_phases(phases or DEFAULT_PHASES)
    if max_optimize_passes is None:
        if settings is None:
            from ..core.config import SETTINGS as settings
        max_optimize_passes = settings.PIPELINE_MAX_OPTIMIZE_PASSES

    log.info(
        "build.start",
        build_id=session.build_id,
        phases=phases,
        chunks=len(session.graph.chunks),
    )

    for phase in phases:
        session.current_phase = phase
        log.info("phase.start", phase=phase, build_id=session.build_id)
        passes = _execute_phase(session, phase, repeat=phase in OPTIMIZE_PHASES, limit=max_optimize_passes)
        log.info(
            "phase.end",
            phase=phase,
            build_id=session.build_id,
            passes=passes,
            chunks=len(session.graph.chunks),
        )

    session.current_phase = None
    log.info("build.end", build_id=session.build_id, chunks=len(session.graph.chunks))
    return session


def _execute_phase(session: BuildSession, phase: str, repeat: bool, limit: int) -> int:
    passes = 0
    while True:
        passes += 1
        changed = False
        for callback in session.hooks.callbacks(phase):
            if callback(session.chunks(), session):
                changed = True
                # First change restarts the phase from the first callback
                break
        if not (repeat and changed):
            return passes
        if passes >= limit:
            log.warning(
                "build.optimize.limit",
                phase=phase,
                build_id=session.build_id,
                passes=passes,
            )
            return passes
