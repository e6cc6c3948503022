"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from nsprune import __version__
from nsprune.cli.commands import config, prune, stale
from nsprune.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="nsprune",
    help="Prune cluster namespaces and volumes of users who are no longer enrolled.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nsprune version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level.
        quiet: Log at WARNING level (ignored when verbose is set).

    Returns:
        The log level that was applied.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger("nsprune")
    root.handlers.clear()
    root.addHandler(RichHandler(console=err_console, show_path=False))
    root.setLevel(level)
    # Engine notices are printed by the CLI itself
    logging.getLogger("nsprune.core.engine").setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )
    return level


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """nsprune - prune namespaces of unenrolled users.

    Compares the cluster's namespaces with the enrollment roster and
    deletes the namespaces and volumes of users who are no longer enrolled.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.add_typer(prune.app, name="prune")
app.add_typer(stale.app, name="stale")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
