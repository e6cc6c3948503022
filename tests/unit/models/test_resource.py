"""Unit tests for cluster resource models."""

import pytest
from nsprune.models.resource import NamespaceRecord, ResourceKind, VolumeRecord


class TestResourceKind:
    """Tests for ResourceKind enum."""

    def test_values(self) -> None:
        """Kinds serialize to lowercase names."""
        assert ResourceKind.NAMESPACE.value == "namespace"
        assert ResourceKind.VOLUME.value == "volume"


class TestRecords:
    """Tests for NamespaceRecord and VolumeRecord."""

    def test_namespace_record(self) -> None:
        """A namespace record holds its name."""
        assert NamespaceRecord(name="btice").name == "btice"

    def test_volume_record(self) -> None:
        """A volume record holds its name."""
        assert VolumeRecord(name="btice-home").name == "btice-home"

    def test_empty_namespace_rejected(self) -> None:
        """Namespace names cannot be empty."""
        with pytest.raises(ValueError, match="Namespace name cannot be empty"):
            NamespaceRecord(name="")

    def test_empty_volume_rejected(self) -> None:
        """Volume names cannot be empty."""
        with pytest.raises(ValueError, match="Volume name cannot be empty"):
            VolumeRecord(name="")
