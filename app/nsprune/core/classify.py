"""Stale namespace classification.

This module decides, for every live namespace, whether its owner is still
enrolled (keep) or not (stale). Two strategies are available:

- per-user: one enrollment lookup per namespace. Scales to large clusters
  without loading the full roster.
- roster-diff: one roster fetch, then a set difference against the live
  namespaces.

Protected namespaces are always kept and never looked up.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from nsprune.core.baseline import DEFAULT_PROTECTED_NAMESPACES, is_protected
from nsprune.core.matching import contains, set_difference

if TYPE_CHECKING:
    from nsprune.sources.base import EnrollmentSource

logger = logging.getLogger(__name__)


class ClassificationStrategy(str, Enum):
    """How stale namespaces are detected.

    Attributes:
        PER_USER: Query the enrollment source once per namespace.
        ROSTER_DIFF: Fetch the whole roster once and diff it.
    """

    PER_USER = "per_user"
    ROSTER_DIFF = "roster_diff"


class Decision(str, Enum):
    """Classification outcome for one namespace."""

    KEEP = "keep"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class ReconciliationDecision:
    """Classification of a single live namespace.

    Attributes:
        namespace: Namespace (and owner) name.
        decision: Keep or stale.
        reason: Why the decision was made.
    """

    namespace: str
    decision: Decision
    reason: str

    @property
    def is_stale(self) -> bool:
        """Check if the namespace should be deleted."""
        return self.decision == Decision.STALE


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying every live namespace.

    Both tuples preserve the order in which the cluster listed the
    namespaces.

    Attributes:
        strategy: Strategy that produced the result.
        keep: Namespaces to keep.
        stale: Namespaces to delete.
    """

    strategy: ClassificationStrategy
    keep: tuple[ReconciliationDecision, ...]
    stale: tuple[ReconciliationDecision, ...]

    @property
    def stale_names(self) -> list[str]:
        """Names of the stale namespaces, in listing order."""
        return [d.namespace for d in self.stale]

    @property
    def is_clean(self) -> bool:
        """Check if no namespace is stale."""
        return not self.stale

    @property
    def total(self) -> int:
        """Number of namespaces classified."""
        return len(self.keep) + len(self.stale)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "strategy": self.strategy.value,
            "summary": {
                "keep": len(self.keep),
                "stale": len(self.stale),
                "total": self.total,
            },
            "keep": [_decision_to_dict(d) for d in self.keep],
            "stale": [_decision_to_dict(d) for d in self.stale],
        }


def _decision_to_dict(decision: ReconciliationDecision) -> dict[str, str]:
    return {"namespace": decision.namespace, "reason": decision.reason}


def _build(
    strategy: ClassificationStrategy,
    decisions: list[ReconciliationDecision],
) -> Classification:
    keep = tuple(d for d in decisions if not d.is_stale)
    stale = tuple(d for d in decisions if d.is_stale)
    logger.info(
        "Classified %d namespace(s): %d keep, %d stale (%s)",
        len(decisions),
        len(keep),
        len(stale),
        strategy.value,
    )
    return Classification(strategy=strategy, keep=keep, stale=stale)


def classify_per_user(
    namespaces: Sequence[str],
    source: EnrollmentSource,
    protected: Sequence[str] = DEFAULT_PROTECTED_NAMESPACES,
) -> Classification:
    """Classify namespaces with one enrollment lookup each.

    Args:
        namespaces: Live namespace names.
        source: Enrollment source to query.
        protected: Protected namespace names and patterns.

    Returns:
        Classification of every namespace.

    Raises:
        SourceUnavailable: If any lookup fails; the run is aborted.
    """
    decisions: list[ReconciliationDecision] = []
    for name in namespaces:
        if is_protected(name, protected):
            decisions.append(ReconciliationDecision(name, Decision.KEEP, "protected"))
            continue

        if source.is_user_active(name):
            decisions.append(ReconciliationDecision(name, Decision.KEEP, "enrolled"))
        else:
            logger.debug("User %s is not enrolled", name)
            decisions.append(ReconciliationDecision(name, Decision.STALE, "not enrolled"))

    return _build(ClassificationStrategy.PER_USER, decisions)


def classify_roster_diff(
    namespaces: Sequence[str],
    source: EnrollmentSource,
    protected: Sequence[str] = DEFAULT_PROTECTED_NAMESPACES,
) -> Classification:
    """Classify namespaces against the full enrollment roster.

    Args:
        namespaces: Live namespace names.
        source: Enrollment source providing the roster.
        protected: Protected namespace names and patterns.

    Returns:
        Classification of every namespace.

    Raises:
        SourceUnavailable: If the roster cannot be fetched.
    """
    roster = source.list_enrolled_usernames()
    missing = set_difference(roster, namespaces)

    decisions: list[ReconciliationDecision] = []
    for name in namespaces:
        if is_protected(name, protected):
            decisions.append(ReconciliationDecision(name, Decision.KEEP, "protected"))
        elif contains(name, missing):
            decisions.append(ReconciliationDecision(name, Decision.STALE, "not in roster"))
        else:
            decisions.append(ReconciliationDecision(name, Decision.KEEP, "in roster"))

    return _build(ClassificationStrategy.ROSTER_DIFF, decisions)


def classify(
    namespaces: Sequence[str],
    source: EnrollmentSource,
    strategy: ClassificationStrategy = ClassificationStrategy.PER_USER,
    protected: Sequence[str] = DEFAULT_PROTECTED_NAMESPACES,
) -> Classification:
    """Classify namespaces with the requested strategy.

    Args:
        namespaces: Live namespace names.
        source: Enrollment source.
        strategy: Classification strategy.
        protected: Protected namespace names and patterns.

    Returns:
        Classification of every namespace.
    """
    if strategy == ClassificationStrategy.ROSTER_DIFF:
        return classify_roster_diff(namespaces, source, protected)
    return classify_per_user(namespaces, source, protected)
