"""Config command implementation.

Shows, locates and initializes the nsprune configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from nsprune.cli.types import require_config
from nsprune.core.config import ConfigError, PruneConfig, save_config
from nsprune.core.paths import get_config_path
from nsprune.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage nsprune configuration.",
    no_args_is_help=True,
)


@app.command("show")
def show_config(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to the config file."),
    ] = None,
) -> None:
    """Show the effective configuration (API key masked)."""
    config = require_config(config_path)

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    for key, value in config.to_display_dict().items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(key, f"[muted]{value}[/muted]" if value is None else str(value))

    console.print(table)


@app.command("path")
def show_path() -> None:
    """Print the default config file location."""
    console.print(str(get_config_path()))


@app.command("init")
def init_config(
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="AWSEd API base URL."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings.

    The API key is not stored; set AWSED_API_KEY in the environment.
    """
    target = config_path or get_config_path()
    if target.exists() and not force:
        print_error(f"Config already exists: {target}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        config = PruneConfig(api_url=api_url)
        written = save_config(config, target)
    except (ConfigError, ValueError) as e:
        print_error(f"Failed to write config: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")
