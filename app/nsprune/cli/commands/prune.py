"""Prune command implementation.

Deletes the namespaces and derived volumes of users who are no longer
enrolled.
"""

from pathlib import Path
from typing import Annotated

import typer

from nsprune.cli.display import (
    create_results_table,
    print_notice,
    print_report_summary,
)
from nsprune.cli.types import StrategyChoice, build_cluster, build_source, require_config
from nsprune.core.engine import ReconciliationEngine
from nsprune.core.errors import DeleteFailed, NsPruneError
from nsprune.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Delete namespaces and volumes of unenrolled users.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def prune(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be deleted without making changes.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the config file.",
        ),
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
    """Delete namespaces and volumes of users who are no longer enrolled.

    Every live namespace is checked against the enrollment source. For each
    stale namespace, the namespace is deleted first and then every volume
    derived from the username and the configured suffixes. Missing volumes
    are skipped.

    The first error aborts the run with exit code 1. Rerunning is safe:
    already-deleted resources no longer show up.

    Examples:
        nsprune prune --dry-run                    # Preview deletions
        nsprune prune                              # Delete stale resources
        nsprune prune -r roster.json --dry-run     # Use a local roster
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path, strategy)
    source = build_source(config, roster_file)

    try:
        cluster = build_cluster(config)
        engine = ReconciliationEngine(config, source, cluster, notify=print_notice)
        report = engine.reconcile(dry_run=dry_run)
    except DeleteFailed as e:
        print_error(str(e))
        print_info("Run aborted; rerun to continue with the remaining resources.")
        raise typer.Exit(code=1) from e
    except NsPruneError as e:
        print_error(f"Reconciliation aborted: {e}")
        raise typer.Exit(code=1) from e

    if report.classification.is_clean:
        print_success("No stale namespaces. Nothing to do.")
        return

    console.print(create_results_table(report))
    print_report_summary(report)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
