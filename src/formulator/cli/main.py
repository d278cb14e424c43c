"""Command-line interface for running and checking the form handler."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import click

from formulator.config.settings import Settings
from formulator.lib.exceptions import ConfigurationException, format_exception_details
from formulator.submission.models import ResponseCode, SubmissionResponse
from formulator.submission.normalizer import normalize
from formulator.submission.validation import run_pipeline

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _configure_logging(verbose: int, quiet: bool) -> None:
    level_index = min(verbose, len(LOG_LEVELS) - 1)
    level = LOG_LEVELS[level_index]
    if quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigurationException as e:
        raise click.ClickException(format_exception_details(e))


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase verbosity (use up to -vv)")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """Serve the form endpoint or check submissions offline."""
    _configure_logging(verbose, quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (default: API_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (default: API_PORT)")
def serve(host: Optional[str], port: Optional[int]) -> None:
    """Start the HTTP server."""
    from formulator.main import main as run_server

    settings = _load_settings()
    run_server(host=host or settings.api_host, port=port or settings.api_port)


@cli.command(name="check-config")
def check_config() -> None:
    """Print the configuration read from the environment."""
    settings = _load_settings()
    click.echo(json.dumps(settings.masked(), indent=2))


@cli.command()
@click.argument("submission", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(submission: Path) -> None:
    """Run the validation pipeline over a JSON submission without notifying."""
    settings = _load_settings()

    try:
        raw = json.loads(submission.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="SUBMISSION")
    if not isinstance(raw, dict):
        raise click.BadParameter("must contain a JSON object", param_hint="SUBMISSION")

    fields = normalize(raw, settings.form_fields)
    failure = run_pipeline(raw, fields, settings)

    if failure is None:
        envelope = SubmissionResponse(code=ResponseCode.FORM_SUBMITTED, detail="Form submitted.")
    else:
        envelope = failure.to_response()

    click.echo(json.dumps(envelope.to_content(), indent=2))
    if failure is not None:
        raise SystemExit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
