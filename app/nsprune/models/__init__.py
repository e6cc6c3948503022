"""Data models for nsprune.

This module exports the core data structures used throughout the application.
"""

from nsprune.models.action import (
    ActionResult,
    ActionStatus,
    DeletionAction,
    create_namespace_action,
    create_volume_action,
)
from nsprune.models.resource import NamespaceRecord, ResourceKind, VolumeRecord
from nsprune.models.roster import EnrolledUser

__all__ = [
    "ActionResult",
    "ActionStatus",
    "DeletionAction",
    "EnrolledUser",
    "NamespaceRecord",
    "ResourceKind",
    "VolumeRecord",
    "create_namespace_action",
    "create_volume_action",
]
