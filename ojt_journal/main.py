from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .models import StudentProfile
from .pipeline.assemble import compose_journal
from .pipeline.errors import CompositionError
from .pipeline.ingest import BundleError, build_personal_information, load_bundle
from .storage import journal_path, write_journal

app = typer.Typer(help="OJT journal composition")
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def build(
    template: Path = typer.Option(..., "--template", help="Journal template PDF"),
    data: Path = typer.Option(..., "--data", help="JSON bundle with the student's records"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    style: Optional[Path] = typer.Option(None, "--style", help="JSON style preset"),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging"),
) -> None:
    _configure_logging(verbose)
    if out:
        config.set_out_dir(out)
    try:
        bundle = load_bundle(data)
        pdf = compose_journal(template, bundle, style=config.load_style_preset(style))
    except (BundleError, CompositionError) as exc:
        logger.exception("Journal composition failed")
        typer.echo(f"FAILED: {exc}", err=True)
        raise typer.Exit(code=1)
    path = write_journal(pdf, journal_path())
    typer.echo(f"READY: {path}")


@app.command()
def profile(
    data: Path = typer.Argument(..., help="JSON student profile"),
    email: str = typer.Option("", "--email", help="Account email used when the profile has none"),
) -> None:
    """Normalize a raw profile and report which personal fields are still blank."""
    try:
        raw = StudentProfile.model_validate_json(data.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        typer.echo(f"FAILED: {exc}", err=True)
        raise typer.Exit(code=1)
    record, missing = build_personal_information(raw, email)
    typer.echo(record.model_dump_json(indent=2))
    if missing:
        typer.echo(f"Missing: {', '.join(missing)}")
    else:
        typer.echo("Missing: none")


if __name__ == "__main__":
    app()
