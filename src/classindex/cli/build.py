"""classindex build command - index Python sources into the build output."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from classindex.config.loader import load_config, resolve_output_dir
from classindex.config.models import ClassIndexConfig
from classindex.core.errors import ClassIndexError, InternalError
from classindex.core.logging import (
    clear_session_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    set_session_id,
)
from classindex.core.progress import get_console, pluralize, status
from classindex.index.engine import ClassIndexer
from classindex.index.models import IndexKind
from classindex.index.resources import FileSystemResourceStore
from classindex.index.writer import WriteReport
from classindex.source.scanner import SourceScanner

log = get_logger("cli.build")


def _overrides(
    output: Path | None,
    annotations: tuple[str, ...],
    superclasses: tuple[str, ...],
    packages: tuple[str, ...],
) -> dict[str, Any]:
    indexer: dict[str, Any] = {}
    if output is not None:
        indexer["output_dir"] = str(output)
    if annotations:
        indexer["annotations"] = list(annotations)
    if superclasses:
        indexer["superclasses"] = list(superclasses)
    if packages:
        indexer["packages"] = list(packages)
    return {"indexer": indexer} if indexer else {}


def default_sources(project_root: Path) -> list[Path]:
    """Source roots when none are given: src/ for a src layout, else the project root."""
    src = project_root / "src"
    return [src] if src.is_dir() else [project_root]


def run_build(
    sources: list[Path], config: ClassIndexConfig, project_root: Path
) -> tuple[WriteReport, ClassIndexer]:
    """Run one indexing session over ``sources``. Returns the write report and the indexer."""
    output_dir = resolve_output_dir(config, project_root)
    store = FileSystemResourceStore(output_dir, readable=config.indexer.merge_existing)
    indexer = ClassIndexer.from_config(config.indexer, store)

    set_session_id()
    try:
        log.info(
            "session_started",
            sources=[str(s) for s in sources],
            output=str(output_dir),
            explicit=config.indexer.explicit,
        )
        for batch in SourceScanner(sources).rounds():
            log.debug("round_started", module=batch.module, types=len(batch.declarations))
            indexer.process(batch.declarations, batch.processing_over)
    finally:
        clear_session_id()

    if indexer.last_report is None:
        raise InternalError.unexpected("source scanner ended without a final round")
    return indexer.last_report, indexer


def _summary_table(report: WriteReport) -> Table:
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("kind", style="cyan")
    table.add_column("resource", style="white")
    table.add_column("entries", justify="right")
    for kind in IndexKind:
        for path, count in sorted(report.written[kind].items()):
            table.add_row(kind.value, path, str(count))
    return table


@click.command()
@click.argument(
    "sources",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Build output root (default: indexer.output_dir from config)",
)
@click.option("--annotation", "-a", "annotations", multiple=True, help="Index this decorator")
@click.option("--superclass", "-s", "superclasses", multiple=True, help="Index subclasses")
@click.option("--package", "-p", "packages", multiple=True, help="Index types of this package")
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root holding classindex.yaml (default: current directory)",
)
@click.pass_context
def build_command(
    ctx: click.Context,
    sources: tuple[Path, ...],
    output: Path | None,
    annotations: tuple[str, ...],
    superclasses: tuple[str, ...],
    packages: tuple[str, ...],
    project: Path | None,
) -> None:
    """Index Python SOURCES and write index files to the build output.

    Without --annotation/--superclass/--package (or their config
    equivalents) the marker decorators from classindex.markers decide
    what is indexed. SOURCES default to the project's src/ directory when
    it has one, else to the project root.
    """
    project_root = (project or Path.cwd()).resolve()
    try:
        config = load_config(
            project_root, **_overrides(output, annotations, superclasses, packages)
        )
    except ClassIndexError as e:
        raise click.ClickException(str(e)) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if not verbose:
        configure_logging(config=config.logging)

    roots = list(sources) or default_sources(project_root)
    try:
        report, indexer = run_build(roots, config, project_root)
    except ClassIndexError as e:
        log.error("session_failed", error=e.error_name, details=e.details)
        status(escape(str(e)), style="error")
        if log_path := get_log_file_path():
            status(f"See {log_path} for details", style="info")
        ctx.exit(1)

    if report.total_files:
        get_console().print(_summary_table(report))
    if indexer.unresolved:
        status(
            f"Skipped {pluralize(len(indexer.unresolved), 'unresolved reference')}",
            style="warning",
        )
    status(
        f"Wrote {pluralize(report.total_files, 'index file')}, "
        f"{pluralize(len(indexer.documentation_written), 'documented type')}",
        style="success",
    )
