"""Reconciliation engine.

The engine obtains the live namespace list, classifies every namespace
against the enrollment source, and deletes each stale namespace followed
by its derived volumes. Processing is strictly sequential: namespaces in
listing order, and within a namespace, volumes in suffix order.

Any error aborts the run. Already-deleted resources simply disappear from
the next listing, so rerunning after a failure is safe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from nsprune.core.classify import Classification, classify
from nsprune.core.volumes import derive_volume_names
from nsprune.models.action import (
    ActionResult,
    ActionStatus,
    DeletionAction,
    create_namespace_action,
    create_volume_action,
)

if TYPE_CHECKING:
    from nsprune.cluster.base import ClusterResourceManager
    from nsprune.core.config import PruneConfig
    from nsprune.sources.base import EnrollmentSource

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    """Severity of a notice emitted during a run."""

    INFO = "info"
    SKIP = "skip"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class Notice:
    """Human-readable progress message emitted by the engine.

    Attributes:
        level: Notice severity.
        message: Text of the notice.
        action: Action the notice refers to.
    """

    level: NoticeLevel
    message: str
    action: DeletionAction


NoticeCallback = Callable[[Notice], None]


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    """Summary of a completed reconciliation run.

    Attributes:
        dry_run: Whether the run was a dry-run.
        classification: Classification of the live namespaces.
        results: Outcome of every deletion action, in processing order.
    """

    dry_run: bool
    classification: Classification
    results: tuple[ActionResult, ...]

    def _count(self, status: ActionStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def deleted_count(self) -> int:
        """Number of resources deleted."""
        return self._count(ActionStatus.DELETED)

    @property
    def skipped_count(self) -> int:
        """Number of resources skipped because they did not exist."""
        return self._count(ActionStatus.SKIPPED)

    @property
    def planned_count(self) -> int:
        """Number of resources that would be deleted (dry-run)."""
        return self._count(ActionStatus.PLANNED)


class ReconciliationEngine:
    """Deletes the namespaces and volumes of users who are no longer enrolled.

    The engine holds no state across runs: every call to reconcile()
    re-derives the full picture from the cluster and the enrollment source.

    Example:
        >>> engine = ReconciliationEngine(config, AwsedEnrollmentSource(config), cluster)
        >>> report = engine.reconcile(dry_run=True)
        >>> print(report.classification.stale_names)
    """

    def __init__(
        self,
        config: PruneConfig,
        source: EnrollmentSource,
        cluster: ClusterResourceManager,
        notify: NoticeCallback | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Immutable configuration (suffixes, strategy, protected names).
            source: Enrollment source used for classification.
            cluster: Cluster manager used to list and delete resources.
            notify: Optional callback receiving every notice as it is emitted.
        """
        self.config = config
        self.source = source
        self.cluster = cluster
        self._notify = notify

    def _emit(self, level: NoticeLevel, message: str, action: DeletionAction) -> None:
        logger.info(message)
        if self._notify is not None:
            self._notify(Notice(level=level, message=message, action=action))

    def classify(self) -> Classification:
        """List live namespaces and classify them.

        Returns:
            Classification of every live namespace.

        Raises:
            ClusterUnavailable: If namespaces cannot be listed.
            SourceUnavailable: If the enrollment source fails.
        """
        namespaces = self.cluster.list_namespace_names()
        logger.debug("Found %d live namespace(s)", len(namespaces))
        return classify(
            namespaces,
            self.source,
            strategy=self.config.strategy,
            protected=self.config.protected_namespaces,
        )

    def reconcile(self, dry_run: bool = False) -> ReconcileReport:
        """Run one reconciliation pass.

        In dry-run mode only notices are emitted: no delete call and no
        existence check reaches the cluster.

        Args:
            dry_run: If True, report what would be deleted without deleting.

        Returns:
            ReconcileReport describing what was (or would be) deleted.

        Raises:
            ClusterUnavailable: If namespaces cannot be listed, or a volume
                lookup fails and existence checks are not lenient.
            SourceUnavailable: If the enrollment source fails.
            DeleteFailed: If the cluster rejects a delete call.
        """
        classification = self.classify()
        results: list[ActionResult] = []

        for username in classification.stale_names:
            results.extend(self._prune_user(username, dry_run))

        report = ReconcileReport(
            dry_run=dry_run,
            classification=classification,
            results=tuple(results),
        )
        logger.info(
            "Reconciliation finished: %d deleted, %d skipped, %d planned",
            report.deleted_count,
            report.skipped_count,
            report.planned_count,
        )
        return report

    def _prune_user(self, username: str, dry_run: bool) -> list[ActionResult]:
        """Delete a stale user's namespace, then each of its derived volumes."""
        results: list[ActionResult] = []

        ns_action = create_namespace_action(username)
        self._emit(NoticeLevel.INFO, f"will delete namespace {username}", ns_action)
        if dry_run:
            results.append(ActionResult(ns_action, ActionStatus.PLANNED))
        else:
            # A failure here propagates before any volume is addressed
            self.cluster.delete_namespace(username)
            self._emit(NoticeLevel.DONE, f"deleted namespace {username}", ns_action)
            results.append(ActionResult(ns_action, ActionStatus.DELETED))

        for volume in derive_volume_names(username, self.config.volume_suffixes):
            results.append(self._prune_volume(volume, username, dry_run))

        return results

    def _prune_volume(self, volume: str, owner: str, dry_run: bool) -> ActionResult:
        action = create_volume_action(volume, owner)
        self._emit(NoticeLevel.INFO, f"will delete volume {volume}", action)

        if dry_run:
            return ActionResult(action, ActionStatus.PLANNED)

        if not self.cluster.volume_exists(volume):
            self._emit(NoticeLevel.SKIP, f"volume {volume} does not exist, skipping", action)
            return ActionResult(action, ActionStatus.SKIPPED, "volume does not exist")

        self.cluster.delete_volume(volume)
        self._emit(NoticeLevel.DONE, f"deleted volume {volume}", action)
        return ActionResult(action, ActionStatus.DELETED)
