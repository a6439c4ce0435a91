"""Human-readable split summary (stderr only)."""

import sys
from typing import Any, Dict, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text


def print_split_summary(
    assurance: Dict[str, Any],
    build_id: str,
    no_color: bool = False,
    file: Optional[TextIO] = None,
) -> None:
    """Print chunk statistics and the assurance status of a split."""
    console = Console(
        file=file or sys.stderr,
        color_system=None if no_color else "auto",
    )

    stats = assurance.get("chunkStats", {})
    limits = assurance.get("limits", {})

    table = Table(title=f"Split {build_id}", show_header=True, expand=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Chunks considered", str(stats.get("considered", 0)))
    table.add_row("Chunks created", str(stats.get("created", 0)))
    table.add_row(
        "Part size min/median/max",
        f"{stats.get('min', 0)}/{stats.get('median', 0)}/{stats.get('max', 0)}",
    )
    table.add_row("Max modules per chunk", str(limits.get("maxModulesPerChunk", "-")))
    table.add_row("Max modules per entry", str(limits.get("maxModulesPerEntry", "-")))
    table.add_row("Async parts", str(assurance.get("asyncParts", {}).get("count", 0)))
    console.print(table)

    status = assurance.get("status", "n/a")
    line = Text()
    if status == "PASS":
        line.append("✅ Assurance PASS", style="bold green")
    elif status == "FAIL":
        line.append("❌ Assurance FAIL", style="bold red")
        oversized = assurance.get("sizeBound", {}).get("count", 0)
        missing = len(assurance.get("conservation", {}).get("missing", []))
        line.append(f" (oversized parts: {oversized}, missing modules: {missing})")
    else:
        line.append(f"Assurance {status}", style="dim")
    console.print(line)
