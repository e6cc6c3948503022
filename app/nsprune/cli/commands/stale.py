"""Stale command implementation.

Lists the namespaces whose owners are no longer enrolled, without
deleting anything.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from nsprune.cli.display import create_classification_table
from nsprune.cli.types import StrategyChoice, build_cluster, build_source, require_config
from nsprune.core.engine import ReconciliationEngine
from nsprune.core.errors import NsPruneError
from nsprune.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="List namespaces of unenrolled users.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_stale(
    ctx: typer.Context,
    output_json: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output the classification as JSON.",
        ),
    ] = False,
    show_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Also list namespaces that are kept.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to the config file."),
    ] = None,
    roster_file: Annotated[
        Path | None,
        typer.Option(
            "--roster-file",
            "-r",
            help="Read enrollments from a local JSON roster instead of AWSEd.",
        ),
    ] = None,
    strategy: Annotated[
        StrategyChoice,
        typer.Option(
            "--strategy",
            "-s",
            help="Stale detection strategy: per_user, roster_diff, or config.",
            case_sensitive=False,
        ),
    ] = StrategyChoice.CONFIG,
) -> None:
    """List namespaces whose owners are no longer enrolled.

    Nothing is deleted and no volume is looked up.

    Examples:
        nsprune stale                 # Show stale namespaces
        nsprune stale --all           # Include kept namespaces
        nsprune stale --json          # Machine-readable output
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path, strategy)
    source = build_source(config, roster_file)

    try:
        engine = ReconciliationEngine(config, source, build_cluster(config))
        classification = engine.classify()
    except NsPruneError as e:
        print_error(f"Classification failed: {e}")
        raise typer.Exit(code=1) from e

    if output_json:
        console.print_json(json.dumps(classification.to_dict()))
        return

    if classification.is_clean and not show_all:
        print_success(f"All {classification.total} namespace(s) belong to enrolled users.")
        return

    console.print(create_classification_table(classification, show_keep=show_all))
    console.print(
        f"\nSummary: [stale]{len(classification.stale)} stale[/stale], "
        f"[keep]{len(classification.keep)} kept[/keep]"
    )
