"""Cluster resource managers for listing and deleting namespaces and volumes.

This module provides the abstract manager interface and its Kubernetes
and in-memory implementations.
"""

from nsprune.cluster.base import ClusterResourceManager
from nsprune.cluster.kubernetes import KubernetesClusterManager
from nsprune.cluster.memory import InMemoryClusterManager

__all__ = ["ClusterResourceManager", "InMemoryClusterManager", "KubernetesClusterManager"]
