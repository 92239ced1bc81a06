"""Typer application and CLI entry point for specdoc.

Commands:

* ``specdoc generate [NAMES...]`` -- load a spec and run generators.
* ``specdoc generators`` -- list the registered generators.
* ``specdoc data`` -- print the processed template data as JSON.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Known errors (:class:`~specdoc.exceptions.SpecdocError`)
exit with their own exit code; anything else is written to a crash log
under the data directory.

See Also:
    :mod:`specdoc.config`: Project configuration resolution.
    :mod:`specdoc.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from specdoc import __version__
from specdoc.exceptions import InvalidUsageError, SpecdocError
from specdoc.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="specdoc",
    help="Generate API documentation from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specdoc {__version__}")
        raise typer.Exit()


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
    """Initialise output formatting and logging before every sub-command."""
    from specdoc.output import OutputFormat, OutputManager, set_output, setup_logging

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    setup_logging(verbose, console=output.stderr_console)


def _exit_with(exc: SpecdocError) -> typer.Exit:
    from specdoc.output import error

    error(str(exc))
    return typer.Exit(code=exc.exit_code)


@app.command("generate")
def generate_command(
    names: Optional[list[str]] = typer.Argument(
        None, help="Generators to run (default: from config, else all)."
    ),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Spec path, URL, or '-' for stdin."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Project config file (default: ./specdoc.json)."
    ),
    exclude_brand: Optional[bool] = typer.Option(
        None, "--exclude-brand/--include-brand", help="Omit specdoc branding."
    ),
    tag_order: Optional[list[str]] = typer.Option(
        None, "--tag-order", help="Tag to list first (repeatable, in order)."
    ),
    no_url_encode: bool = typer.Option(
        False, "--no-url-encode", help="Lowercase anchors."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Fallback base URL for code samples."
    ),
) -> None:
    """Generate documentation files from an OpenAPI spec.

    Example::

        specdoc generate --spec openapi.yaml
        specdoc generate markdown postman -s openapi.yaml -o ./docs --tag-order Users
    """
    from specdoc.config import resolve_config
    from specdoc.generators import default_registry
    from specdoc.output import debug, info, success, suggest
    from specdoc.parser import load_document

    try:
        config = resolve_config(
            config_path=config_path,
            cli_spec=spec,
            cli_output_dir=output_dir,
            cli_base_url=base_url,
            cli_exclude_brand=exclude_brand,
            cli_tag_order=tag_order,
            cli_url_encode_anchors=False if no_url_encode else None,
            cli_generators=names,
        )
        if not config.spec:
            raise InvalidUsageError(
                "No spec given. Pass --spec or set 'spec' in specdoc.json"
            )

        registry = default_registry()
        registry.discover()
        selected = config.generators or registry.names()
        generators = [registry.get(name) for name in selected]

        document, openapi_version = load_document(config.spec)
        debug(f"Loaded OpenAPI {openapi_version} spec from {config.spec}")

        options = config.processor_options()
        written = []
        for generator in generators:
            debug(f"Running generator '{generator.name}'")
            for path in generator.generate(document, options, config.output_dir):
                success(f"Wrote {path}")
                written.append(path)
    except SpecdocError as exc:
        if isinstance(exc, InvalidUsageError):
            suggest("Run: specdoc generate --spec <path-or-url>")
        raise _exit_with(exc) from None

    info(f"Generated {len(written)} file(s) in {config.output_dir}")


@app.command("generators")
def generators_command() -> None:
    """List the available generators.

    Example::

        specdoc generators
        specdoc --json generators
    """
    from specdoc.generators import default_registry
    from specdoc.output import get_output

    registry = default_registry()
    registry.discover()
    rows = [[d["name"], d["description"], d["outputs"]] for d in registry.describe()]
    get_output().print_table(["Name", "Description", "Outputs"], rows, title="Generators")


@app.command("data")
def data_command(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Spec path, URL, or '-' for stdin."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Project config file (default: ./specdoc.json)."
    ),
    tag_order: Optional[list[str]] = typer.Option(
        None, "--tag-order", help="Tag to list first (repeatable, in order)."
    ),
    no_url_encode: bool = typer.Option(False, "--no-url-encode", help="Lowercase anchors."),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Fallback base URL for code samples."
    ),
    timestamp: Optional[str] = typer.Option(
        None, "--timestamp", help="Fixed timestamp for reproducible output."
    ),
) -> None:
    """Print the template data for a spec as JSON on stdout.

    Example::

        specdoc data --spec openapi.yaml --timestamp 2024-01-01T00:00:00Z > data.json
    """
    from specdoc.config import resolve_config
    from specdoc.output import print_json
    from specdoc.parser import load_document
    from specdoc.processor import OpenApiProcessor

    try:
        config = resolve_config(
            config_path=config_path,
            cli_spec=spec,
            cli_base_url=base_url,
            cli_tag_order=tag_order,
            cli_url_encode_anchors=False if no_url_encode else None,
        )
        if not config.spec:
            raise InvalidUsageError("No spec given. Pass --spec or set 'spec' in specdoc.json")

        document, _ = load_document(config.spec)
        options = config.processor_options()
        if timestamp is not None:
            options = options.model_copy(update={"timestamp": timestamp})
        data = OpenApiProcessor(options).process(document)
    except SpecdocError as exc:
        raise _exit_with(exc) from None

    print_json(data.as_context())


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from specdoc.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{stamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``specdoc`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specdoc.output import error

        if isinstance(exc, SpecdocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
