OPTIMIZE_PHASES: list[str] = [
    "optimize-chunks",
    "optimize-extracted-chunks",
]

DEFAULT_PHASES: list[str] = [
    "seal",
    *OPTIMIZE_PHASES,
    "emit",
]


def validate_phases(phases: list[str]) -> list[str]:
    bad = [p for p in phases if p not in DEFAULT_PHASES]
    if bad:
        raise ValueError(f"Unknown phases: {bad}")
    return phases
