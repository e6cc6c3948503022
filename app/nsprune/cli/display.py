"""Shared Rich display functions for classifications and run reports.

Provides reusable table builders and summary printers used by the
prune and stale commands.
"""

from rich.markup import escape
from rich.table import Table

from nsprune.core.classify import Classification
from nsprune.core.engine import Notice, NoticeLevel, ReconcileReport
from nsprune.models.action import ActionStatus
from nsprune.utils.formatting import console, print_success

_NOTICE_STYLES: dict[NoticeLevel, str] = {
    NoticeLevel.INFO: "warning",
    NoticeLevel.SKIP: "skipped",
    NoticeLevel.DONE: "success",
}

_STATUS_DISPLAY: dict[ActionStatus, str] = {
    ActionStatus.PLANNED: "[warning]PLAN[/warning]",
    ActionStatus.DELETED: "[success]OK[/success]",
    ActionStatus.SKIPPED: "[skipped]SKIP[/skipped]",
}


def print_notice(notice: Notice) -> None:
    """Print an engine notice as it is emitted.

    Args:
        notice: Notice received from the reconciliation engine.
    """
    style = _NOTICE_STYLES[notice.level]
    console.print(f"[{style}]{escape(notice.message)}[/{style}]")


def create_classification_table(classification: Classification, show_keep: bool = False) -> Table:
    """Create a Rich table listing classified namespaces.

    Args:
        classification: Classification to display.
        show_keep: Also list namespaces that are kept.

    Returns:
        Rich Table configured for classification display.
    """
    table = Table(
        title=f"Namespaces ({classification.strategy.value})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Namespace", no_wrap=True)
    table.add_column("Reason")

    for decision in classification.stale:
        table.add_row(
            "[stale]stale[/stale]",
            f"[stale]{escape(decision.namespace)}[/stale]",
            f"[muted]{decision.reason}[/muted]",
        )

    if show_keep:
        for decision in classification.keep:
            table.add_row(
                "[keep]keep[/keep]",
                escape(decision.namespace),
                f"[muted]{decision.reason}[/muted]",
            )

    return table


def create_results_table(report: ReconcileReport) -> Table:
    """Create a Rich table displaying the outcome of every deletion.

    Args:
        report: Report returned by the engine.

    Returns:
        Rich Table configured for results display.
    """
    title = "Planned Deletions (Dry Run)" if report.dry_run else "Results"
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Kind", width=10)
    table.add_column("Name", no_wrap=True)
    table.add_column("Owner")

    for result in report.results:
        table.add_row(
            _STATUS_DISPLAY[result.status],
            result.action.kind.value,
            escape(result.action.name),
            f"[muted]{escape(result.action.owner)}[/muted]",
        )

    return table


def print_report_summary(report: ReconcileReport) -> None:
    """Print a one-line summary of a run.

    Args:
        report: Report returned by the engine.
    """
    stale_count = len(report.classification.stale)
    if report.dry_run:
        console.print(
            f"\nSummary: [stale]{stale_count} stale namespace(s)[/stale], "
            f"[warning]{report.planned_count} resource(s) would be deleted[/warning]"
        )
        return

    print_success(
        f"Pruned {stale_count} namespace(s): "
        f"{report.deleted_count} resource(s) deleted, {report.skipped_count} skipped."
    )
