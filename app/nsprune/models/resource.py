"""Cluster resource models.

Namespaces and volumes are observed by nsprune, never created. A
namespace is named after the user who owns it.
"""

from dataclasses import dataclass
from enum import Enum


class ResourceKind(str, Enum):
    """Kind of cluster resource handled by nsprune.

    Attributes:
        NAMESPACE: A per-user namespace.
        VOLUME: A cluster-scoped persistent volume derived from a username.
    """

    NAMESPACE = "namespace"
    VOLUME = "volume"


@dataclass(frozen=True, slots=True)
class NamespaceRecord:
    """A live namespace, named after its owning user."""

    name: str

    def __post_init__(self) -> None:
        """Validate namespace data after initialization."""
        if not self.name:
            msg = "Namespace name cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class VolumeRecord:
    """A cluster-scoped persistent volume.

    Ownership is not recorded on the volume; the engine derives volume
    names from a username and tracks the owner on the deletion action.

    Attributes:
        name: Volume name (username + suffix).
    """

    name: str

    def __post_init__(self) -> None:
        """Validate volume data after initialization."""
        if not self.name:
            msg = "Volume name cannot be empty"
            raise ValueError(msg)
