"""CLI command implementations"""

import logging
from typing import Annotated, Optional

import typer

from pdfcomposer.config import Settings, build_config, load_config
from pdfcomposer.core.models import DocumentResult, DocumentStatus
from pdfcomposer.core.page import FontsStandard, PaperOrientation, PaperSize, PDFVersion, css_font
from pdfcomposer.core.pipeline import run_generate
from pdfcomposer.core.render import ChromiumRenderer
from pdfcomposer.exceptions import EmptySourceListError


CHECK_MARK = "✓"
CROSS_MARK = "✗"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.secho(f"{CROSS_MARK} Error: {msg}", err=True, fg=typer.colors.RED)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _echo_result(result: DocumentResult) -> None:
    """Print one document's outcome with its metadata entries."""
    if result.ok:
        typer.secho(f"{CHECK_MARK} {result.source} -> {result.output_path}", fg=typer.colors.GREEN)
        for field_name, value in result.doc_info.items():
            typer.echo(f"  * {field_name}: {value}")
        return
    color = typer.colors.YELLOW if result.status == DocumentStatus.skipped else typer.colors.RED
    typer.secho(f"{CROSS_MARK} {result.source}: {result.message}", fg=color)


def generate_cmd(
    sources: Annotated[Optional[list[str]], typer.Argument(help="Markdown files with YAML front matter")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    pdf_version: Annotated[Optional[PDFVersion], typer.Option("--pdf-version", help="PDF format version")] = None,
    paper_size: Annotated[Optional[PaperSize], typer.Option("--paper-size", case_sensitive=False, help="Paper size")] = None,
    orientation: Annotated[Optional[PaperOrientation], typer.Option("--orientation", case_sensitive=False, help="Page orientation")] = None,
    margins: Annotated[Optional[str], typer.Option("--margins", help="Margins in mm: 'all', 'tb lr', 't lr b' or 't r b l'")] = None,
    font: Annotated[Optional[FontsStandard], typer.Option("--font", case_sensitive=False, help="Standard PDF font")] = None,
    entries: Annotated[Optional[list[str]], typer.Option("--entry", help="PDF info entry as FIELD=KEY; repeatable")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Documents rendered concurrently")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level")] = None,
    ):
    """Generate one PDF per source document: merge front matter, render, and set document info."""
    settings = _settings(overrides={
        "output_dir": out, "pdf_version": pdf_version, "paper_size": paper_size,
        "orientation": orientation, "margins": margins, "font": font,
        "doc_info_entries": entries, "workers": workers, "log_level": log_level,
    })
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(settings, sources or [])
    except ValueError as e:
        _fail(str(e))

    try:
        results = run_generate(config, ChromiumRenderer())
    except EmptySourceListError as e:
        _fail(f"{e}. Exiting")

    for result in results:
        _echo_result(result)
    done = sum(r.ok for r in results)
    skipped = sum(r.status == DocumentStatus.skipped for r in results)
    failed = sum(r.status == DocumentStatus.failed for r in results)
    typer.echo(
        f"Generated {done} PDF(s) in {config.output_dir}/ - "
        f"{skipped} skipped, {failed} failed"
    )


def paper_sizes_cmd():
    """List supported paper sizes with portrait dimensions in inches."""
    for size in PaperSize:
        width, height = size.dimensions
        typer.echo(f"{size.value:<12} {width} x {height} in")


def fonts_cmd():
    """List standard fonts with their CSS family, weight and style."""
    for font in FontsStandard:
        css = css_font(font)
        typer.echo(f"{font.value:<21} {css.family} / {css.weight} / {css.style}")
