"""Qwexpr CLI Entry Point

Render YAML expression documents from the command line.

Usage:
    qwexpr render query.yaml                 # Render to stdout
    qwexpr render query.yaml -c table=users  # Override context values
    qwexpr render query.yaml --debug         # Show {TYPE:...} debug view
    qwexpr render query.yaml --safe          # Print error marker instead of failing
    qwexpr --version                         # Show version
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from qwexpr._version import __version__
from qwexpr.config import RenderConfig, find_config
from qwexpr.document import build_expression, load_document
from qwexpr.exceptions import ConfigError, QwexprError

log = logging.getLogger(__name__)

console = Console(stderr=True)

typer_app = typer.Typer(no_args_is_help=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the qwexpr package.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (QWEXPR_DEBUG=1): DEBUG level - shows everything
    """
    if os.environ.get("QWEXPR_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=bool(os.environ.get("QWEXPR_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("qwexpr")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    sys.exit(exit_code)


def parse_context(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse repeated key=value options into a context mapping."""
    context: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        context[key] = value
    return context


def load_render_config(path: Optional[Path]) -> RenderConfig:
    """Load an explicit config file, or qwexpr.yaml from cwd or its parents."""
    if path is not None:
        if not path.exists():
            raise ConfigError(path, "file not found")
        return RenderConfig.load(path)

    found = find_config()
    if found is None:
        return RenderConfig()
    log.info("Using config %s", found)
    return RenderConfig.load(found)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"qwexpr {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Composable text expressions - render YAML expression documents."""


@typer_app.command()
def render(
    file: Path = typer.Argument(..., help="Path to an expression document."),
    context: Optional[List[str]] = typer.Option(
        None, "-c", "--context", help="Context value as key=value (repeatable)."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a qwexpr.yaml config file."
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Render the {TYPE:...} debug view."
    ),
    safe: bool = typer.Option(
        False, "--safe", help="Print the error marker instead of failing."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render an expression document to stdout.

    \b
    Examples:
        qwexpr render query.yaml
        qwexpr render query.yaml -c table=users -c column=id
    """
    setup_logging(verbose)
    overrides = parse_context(context)

    try:
        config = load_render_config(config_path)
        if safe:
            config = config.model_copy(update={"on_error": "marker"})

        expression = build_expression(load_document(file), config)
        if overrides:
            expression = expression.with_context(
                {**expression.get_context(), **overrides}
            )
        log.info("Rendering %s (%d items)", file, len(expression))

        text = expression.get_debug_string() if debug else str(expression)
    except QwexprError as exc:
        exit_with_error(str(exc))

    typer.echo(text)


def app() -> None:
    """Entry point for the installed `qwexpr` script."""
    typer_app()


if __name__ == "__main__":
    app()
