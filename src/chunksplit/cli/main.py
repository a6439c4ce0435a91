import json
import sys
from pathlib import Path

import typer

from ..core.config import SETTINGS, Settings
from ..core.errors import SplitError
from ..core.logging import log, setup_logging

app = typer.Typer(add_completion=False, help="chunksplit CLI")


@app.callback()
def _init() -> None:
    setup_logging(SETTINGS.LOG_FORMAT, SETTINGS.LOG_LEVEL)  # type: ignore[arg-type]


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config(
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.chunksplit.yaml auto-discovered)",
    ),
) -> None:
    """Print the effective settings as JSON."""
    settings = Settings.load_config(config_file)
    typer.echo(json.dumps(settings.model_dump(), indent=2, sort_keys=True))


@app.command()
def split(
    graph_file: Path = typer.Argument(..., help="Graph description (JSON)"),
    out: str | None = typer.Option(
        None,
        "--out",
        help="Where to write the split graph ('-' for stdout); default var/builds/<build_id>/split/graph.json",
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Where to write the assurance report"
    ),
    max_modules_per_chunk: int | None = typer.Option(
        None, "--max-modules-per-chunk", help="Modules kept per chunk"
    ),
    max_modules_per_entry: int | None = typer.Option(
        None, "--max-modules-per-entry", help="Size of the first part split off an entry chunk"
    ),
    allow_parent_overwrite: bool = typer.Option(
        False,
        "--allow-parent-overwrite",
        help="Replace parents of split chunks even when they come from outside the split",
    ),
    build_id: str | None = typer.Option(None, "--build-id", help="Build identifier"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored summary"),
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.chunksplit.yaml auto-discovered)",
    ),
) -> None:
    """Split oversized chunks of a graph description."""
    from ..core.artifacts import phase_dir
    from ..graph.loader import dump_graph, load_graph, write_graph
    from ..pipeline.runner import run as run_build
    from ..pipeline.session import BuildSession
    from ..pipeline.steps.split import ChunkSplittingPlugin, SplitOptions
    from .summary import print_split_summary

    settings = Settings.load_config(config_file)

    try:
        graph = load_graph(graph_file)
        options = SplitOptions.from_settings(
            settings,
            max_modules_per_chunk=max_modules_per_chunk,
            max_modules_per_entry=max_modules_per_entry,
            allow_parent_overwrite=allow_parent_overwrite or None,
        ).validate()

        session = BuildSession(graph, build_id=build_id)
        plugin = ChunkSplittingPlugin(options)
        plugin.apply(session)
        run_build(session, settings=settings)
    except FileNotFoundError as e:
        typer.echo(f"❌ Graph file not found: {e.filename}", err=True)
        raise typer.Exit(1) from e
    except SplitError as e:
        log.error("split.failed", error=str(e), error_type=type(e).__name__)
        typer.echo(f"❌ {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1) from e

    assurance = session.reports.get(plugin.ident, {})

    if out == "-":
        json.dump(dump_graph(graph), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        if out is None:
            out_path = phase_dir(session.build_id, "split") / "graph.json"
            if report is None:
                report = out_path.parent / "assurance.json"
        else:
            out_path = Path(out)
        write_graph(graph, out_path)
        typer.echo(f"✅ Wrote {out_path}", err=True)

    if report is not None:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(json.dumps(assurance, indent=2) + "\n", encoding="utf-8")

    print_split_summary(assurance, session.build_id, no_color=no_color)
    if assurance.get("status") == "FAIL":
        raise typer.Exit(2)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
