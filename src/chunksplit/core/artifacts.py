from datetime import datetime, timezone
from pathlib import Path
import uuid

from .config import SETTINGS


def new_build_id() -> str:
    return f"{datetime.now(timezone.utc).strftime('%Y-%m-%d_%H%M%S')}_{uuid.uuid4().hex[:4]}"


def workdir() -> Path:
    """Tool-managed workspace directory (default: var/)"""
    return Path(SETTINGS.CHUNKSPLIT_WORKDIR)


def builds_dir() -> Path:
    """Build artifact directory (default: var/builds/)"""
    return workdir() / "builds"


def phase_dir(build_id: str, phase: str) -> Path:
    p = builds_dir() / build_id / phase
    p.mkdir(parents=True, exist_ok=True)
    return p
