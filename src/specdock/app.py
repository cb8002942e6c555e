"""Typer application and CLI entry point for specdock.

Commands:

* ``specdock mock SOURCE`` -- normalize a document and print it with
  generated response examples.
* ``specdock validate FILE`` -- run the structural check on a document.
* ``specdock register`` -- register one document into a registry backed by
  a spec directory and print the resulting status report.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from specdock import __version__
from specdock.exceptions import IOError_, InvalidUsageError, SpecdockError, ValidationWarning
from specdock.output import (
    OutputFormat,
    OutputManager,
    error,
    format_response,
    print_document,
    print_table,
    set_output,
    success,
    suggest,
    warning,
)


app = typer.Typer(
    name="specdock",
    help="Normalize OpenAPI/Swagger documents, generate examples, and publish them.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specdock {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the output manager and logging before every sub-command."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    _configure_logging(verbose)


@app.command("mock")
def mock_command(
    source: str = typer.Argument(..., help="Spec file path or http(s) URL."),
    seed: int = typer.Option(0, "--seed", help="Seed for generated values."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the mocked document to this file."
    ),
) -> None:
    """Print SOURCE as OpenAPI 3.x YAML with generated response examples."""
    from specdock.mocking import mock_document
    from specdock.sources import fetch_remote, is_remote, read_local

    try:
        content = fetch_remote(source) if is_remote(source) else read_local(source)
        mocked = mock_document(content, seed=seed)
        if output is not None:
            try:
                output.write_text(mocked, encoding="utf-8")
            except OSError as exc:
                raise IOError_(f"Failed to write {output}: {exc}") from exc
    except SpecdockError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if output is not None:
        success(f"Wrote mocked spec to {output}")
    else:
        print_document(mocked)


@app.command("validate")
def validate_command(
    file: Path = typer.Argument(..., help="Spec file to check."),
) -> None:
    """Run the best-effort structural check on FILE."""
    from specdock.parser.validator import validate_spec_file

    try:
        result = validate_spec_file(file)
    except ValidationWarning as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = [
        ["version", result.spec_version or ""],
        ["title", result.title or ""],
        ["paths", str(result.path_count)],
        ["schemas", str(result.schema_count)],
    ]
    print_table(["field", "value"], rows, title=str(file))


@app.command("register")
def register_command(
    namespace: str = typer.Option(..., "--namespace", help="Owning namespace."),
    name: str = typer.Option(..., "--name", help="Resource name."),
    spec: str = typer.Option("", "--spec", help="Spec file path or http(s) URL."),
    content_file: Optional[Path] = typer.Option(
        None, "--content-file", help="Read the spec inline from this file."
    ),
    title: str = typer.Option("", "--title", help="Documentation title."),
    mock: bool = typer.Option(False, "--mock", help="Generate response examples."),
    spec_directory: Optional[str] = typer.Option(
        None, "--spec-directory", help="Directory for persisted specs."
    ),
    external_url: Optional[str] = typer.Option(
        None, "--external-url", help="Public base URL for published specs."
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Port for the cluster-local URL."),
) -> None:
    """Register one document and print the status report."""
    from specdock.config import resolve_config
    from specdock.models import SpecRequest
    from specdock.registry import SpecRegistry
    from specdock.status import available_status, failed_status

    try:
        config = resolve_config(
            port=port, external_url=external_url, spec_directory=spec_directory
        )
        spec_content = ""
        if content_file is not None:
            try:
                spec_content = content_file.read_text(encoding="utf-8")
            except OSError as exc:
                raise InvalidUsageError(f"Cannot read {content_file}: {exc}") from exc
        request = SpecRequest(
            namespace=namespace,
            name=name,
            title=title or name,
            spec_path=spec,
            spec_content=spec_content,
            mock=mock,
        )
        registry = SpecRegistry(config)
    except SpecdockError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        record = registry.register(request)
    except SpecdockError as exc:
        report = failed_status(exc)
        format_response(report.model_dump(mode="json", by_alias=True, exclude_none=True))
        error(str(exc))
        if not spec and content_file is None:
            suggest("Pass --spec <path|url> or --content-file <file>")
        raise typer.Exit(code=exc.exit_code) from None

    report = available_status(record)
    format_response(report.model_dump(mode="json", by_alias=True, exclude_none=True))
    if not record.validation.valid:
        warning(f"Published with a validation warning: {record.validation.warning}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specdock`` console script."""
    _setup_signal_handlers()
    try:
        app()
    except SpecdockError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
