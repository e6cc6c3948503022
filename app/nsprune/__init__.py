"""nsprune - prune cluster namespaces of users who are no longer enrolled."""

__version__ = "0.1.0"
