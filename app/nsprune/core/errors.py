"""Error types raised during a reconciliation run.

Every error here aborts the current run. None of them are retried
internally; they are surfaced to the caller (normally the CLI), which
reports them and exits with a non-zero status.
"""


class NsPruneError(Exception):
    """Base exception for reconciliation errors."""


class SourceUnavailable(NsPruneError):
    """Raised when the enrollment source is unreachable or returns a bad payload."""


class ClusterUnavailable(NsPruneError):
    """Raised when the cluster cannot be queried (e.g. namespaces cannot be listed)."""


# Listing failures are the only way a run aborts before classification.
ListError = ClusterUnavailable


class DeleteFailed(NsPruneError):
    """Raised when the cluster rejects a namespace or volume delete call.

    Attributes:
        kind: Resource kind that failed ("namespace" or "volume").
        name: Name of the resource.
    """

    def __init__(self, kind: str, name: str, reason: str) -> None:
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to delete {kind} {name}: {reason}")
