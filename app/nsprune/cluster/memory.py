"""In-memory cluster resource manager.

A dictionary-backed stand-in for a real cluster. It records every call it
receives and can be told to fail specific operations, which makes it the
reference double for engine tests.
"""

import logging
from collections.abc import Iterable, Mapping

from nsprune.cluster.base import ClusterResourceManager
from nsprune.core.errors import ClusterUnavailable, DeleteFailed
from nsprune.models.resource import NamespaceRecord, ResourceKind, VolumeRecord

logger = logging.getLogger(__name__)


class InMemoryClusterManager(ClusterResourceManager):
    """Cluster manager holding namespaces and volumes in memory.

    Attributes:
        calls: Ordered log of (operation, name) tuples received.
    """

    def __init__(
        self,
        namespaces: Iterable[str] = (),
        volumes: Iterable[str] = (),
        lenient_existence_checks: bool = False,
    ) -> None:
        """Initialize the manager with an initial set of resources.

        Args:
            namespaces: Namespace names that exist initially.
            volumes: Volume names that exist initially.
            lenient_existence_checks: Coerce existence-check errors to False.
        """
        super().__init__(lenient_existence_checks=lenient_existence_checks)
        self._namespaces: dict[str, NamespaceRecord] = {}
        self._volumes: dict[str, VolumeRecord] = {}
        self.calls: list[tuple[str, str]] = []
        self._fail_listing = False
        self._failing_deletes: set[tuple[ResourceKind, str]] = set()
        self._failing_lookups: set[str] = set()

        for name in namespaces:
            self.add_namespace(name)
        for name in volumes:
            self.add_volume(name)

    # -- test setup --------------------------------------------------------

    def add_namespace(self, name: str) -> NamespaceRecord:
        """Create a namespace record."""
        record = NamespaceRecord(name=name)
        self._namespaces[name] = record
        return record

    def add_volume(self, name: str) -> VolumeRecord:
        """Create a volume record."""
        record = VolumeRecord(name=name)
        self._volumes[name] = record
        return record

    def fail_listing(self) -> None:
        """Make list_namespace_names() raise ClusterUnavailable."""
        self._fail_listing = True

    def fail_delete(self, kind: ResourceKind, name: str) -> None:
        """Make the delete call for one resource raise DeleteFailed."""
        self._failing_deletes.add((kind, name))

    def fail_lookup(self, name: str) -> None:
        """Make existence checks for one name error out."""
        self._failing_lookups.add(name)

    def clear_failures(self) -> None:
        """Remove every injected failure."""
        self._fail_listing = False
        self._failing_deletes.clear()
        self._failing_lookups.clear()

    # -- inspection --------------------------------------------------------

    @property
    def namespaces(self) -> list[str]:
        """Names of the namespaces currently present."""
        return list(self._namespaces)

    @property
    def volumes(self) -> list[str]:
        """Names of the volumes currently present."""
        return list(self._volumes)

    @property
    def mutating_calls(self) -> list[tuple[str, str]]:
        """Calls that delete, or check existence ahead of deleting."""
        return [call for call in self.calls if call[0] != "list_namespace_names"]

    # -- ClusterResourceManager --------------------------------------------

    def list_namespace_names(self) -> list[str]:
        """List namespace names in insertion order."""
        self.calls.append(("list_namespace_names", ""))
        if self._fail_listing:
            msg = "Cannot list namespaces: cluster unreachable"
            raise ClusterUnavailable(msg)
        return list(self._namespaces)

    def _exists(self, store: Mapping[str, object], name: str) -> bool:
        if name in self._failing_lookups:
            if self.lenient_existence_checks:
                logger.warning("Lookup of %s failed; treating it as absent", name)
                return False
            msg = f"Lookup of {name} failed"
            raise ClusterUnavailable(msg)
        return name in store

    def namespace_exists(self, name: str) -> bool:
        """Check whether a namespace is present."""
        self.calls.append(("namespace_exists", name))
        return self._exists(self._namespaces, name)

    def volume_exists(self, name: str) -> bool:
        """Check whether a volume is present."""
        self.calls.append(("volume_exists", name))
        return self._exists(self._volumes, name)

    def delete_namespace(self, name: str) -> None:
        """Remove a namespace."""
        self.calls.append(("delete_namespace", name))
        if (ResourceKind.NAMESPACE, name) in self._failing_deletes:
            raise DeleteFailed(ResourceKind.NAMESPACE.value, name, "rejected by cluster")
        if self._namespaces.pop(name, None) is None:
            logger.debug("Namespace %s already absent", name)

    def delete_volume(self, name: str) -> None:
        """Remove a volume."""
        self.calls.append(("delete_volume", name))
        if (ResourceKind.VOLUME, name) in self._failing_deletes:
            raise DeleteFailed(ResourceKind.VOLUME.value, name, "rejected by cluster")
        if self._volumes.pop(name, None) is None:
            logger.debug("Volume %s already absent", name)
