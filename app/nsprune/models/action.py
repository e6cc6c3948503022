"""Action models for deletion operations.

This module defines data structures for representing the deletions a
reconciliation run plans or performs, and their outcomes.
"""

from dataclasses import dataclass
from enum import Enum

from nsprune.models.resource import ResourceKind


class ActionStatus(str, Enum):
    """Outcome of a single deletion action.

    Attributes:
        PLANNED: Dry-run; the resource would have been deleted.
        DELETED: The delete call was accepted by the cluster.
        SKIPPED: The resource did not exist, so nothing was deleted.
    """

    PLANNED = "planned"
    DELETED = "deleted"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class DeletionAction:
    """Represents a single resource deletion.

    Attributes:
        kind: Kind of resource to delete.
        name: Name of the resource.
        owner: Username the resource belongs to.
    """

    kind: ResourceKind
    name: str
    owner: str

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.name:
            msg = "Resource name cannot be empty"
            raise ValueError(msg)

    @property
    def is_namespace(self) -> bool:
        """Check if this action deletes a namespace."""
        return self.kind == ResourceKind.NAMESPACE

    @property
    def is_volume(self) -> bool:
        """Check if this action deletes a volume."""
        return self.kind == ResourceKind.VOLUME


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of processing a deletion action.

    Failed deletions are not represented here: they abort the run with
    a DeleteFailed error instead.

    Attributes:
        action: The action that was processed.
        status: What happened to the resource.
        message: Optional human-readable detail.
    """

    action: DeletionAction
    status: ActionStatus
    message: str | None = None

    @property
    def deleted(self) -> bool:
        """Check if the resource was deleted."""
        return self.status == ActionStatus.DELETED

    @property
    def skipped(self) -> bool:
        """Check if the resource was skipped."""
        return self.status == ActionStatus.SKIPPED

    @property
    def planned(self) -> bool:
        """Check if the action was only planned (dry-run)."""
        return self.status == ActionStatus.PLANNED


def create_namespace_action(username: str) -> DeletionAction:
    """Create a deletion action for a user's namespace.

    Args:
        username: Namespace (and owner) name.

    Returns:
        DeletionAction for the namespace.
    """
    return DeletionAction(kind=ResourceKind.NAMESPACE, name=username, owner=username)


def create_volume_action(volume: str, owner: str) -> DeletionAction:
    """Create a deletion action for a user's volume.

    Args:
        volume: Volume name.
        owner: Username the volume was derived from.

    Returns:
        DeletionAction for the volume.
    """
    return DeletionAction(kind=ResourceKind.VOLUME, name=volume, owner=owner)
