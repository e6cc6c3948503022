"""Abstract base class for cluster resource managers.

This module defines the ClusterResourceManager interface used by the
reconciliation engine to observe and delete namespaces and volumes.
"""

from abc import ABC, abstractmethod


class ClusterResourceManager(ABC):
    """Abstract base class for cluster resource managers.

    Managers list namespaces, check whether resources exist, and delete
    them. They never create resources.

    Attributes:
        lenient_existence_checks: If True, errors during existence checks
            are logged and reported as "does not exist" instead of raised.

    Example:
        >>> manager = KubernetesClusterManager.from_config(config)
        >>> for name in manager.list_namespace_names():
        ...     print(name)
    """

    def __init__(self, lenient_existence_checks: bool = False) -> None:
        """Initialize the manager.

        Args:
            lenient_existence_checks: Coerce existence-check errors to False.
        """
        self._lenient_existence_checks = lenient_existence_checks

    @property
    def lenient_existence_checks(self) -> bool:
        """Check if existence-check errors are coerced to False."""
        return self._lenient_existence_checks

    @abstractmethod
    def list_namespace_names(self) -> list[str]:
        """List the names of all live namespaces.

        Returns:
            Namespace names in the order reported by the cluster.

        Raises:
            ClusterUnavailable: If namespaces cannot be enumerated.
        """

    @abstractmethod
    def namespace_exists(self, name: str) -> bool:
        """Check whether a namespace exists.

        Raises:
            ClusterUnavailable: If the lookup fails and existence checks
                are not lenient.
        """

    @abstractmethod
    def volume_exists(self, name: str) -> bool:
        """Check whether a persistent volume exists.

        Raises:
            ClusterUnavailable: If the lookup fails and existence checks
                are not lenient.
        """

    @abstractmethod
    def delete_namespace(self, name: str) -> None:
        """Delete a namespace.

        Raises:
            DeleteFailed: If the cluster rejects the delete call.
        """

    @abstractmethod
    def delete_volume(self, name: str) -> None:
        """Delete a persistent volume.

        Raises:
            DeleteFailed: If the cluster rejects the delete call.
        """
