"""Protected namespace definitions.

Cluster system namespaces are not owned by any user and must never be
pruned, no matter what the enrollment source says about them.
"""

import fnmatch
from collections.abc import Sequence

# Default protected namespace names and glob patterns
DEFAULT_PROTECTED_NAMESPACES: tuple[str, ...] = (
    "default",
    "kube-*",
    "kubernetes-dashboard",
)


def is_protected(namespace: str, patterns: Sequence[str] = DEFAULT_PROTECTED_NAMESPACES) -> bool:
    """Check if a namespace is protected and should not be deleted.

    A namespace is protected if it equals one of the patterns or matches
    one of them as a glob (e.g. ``kube-*``). Matching is case-sensitive.

    Args:
        namespace: Namespace name to check.
        patterns: Protected names and glob patterns.

    Returns:
        True if the namespace is protected, False otherwise.
    """
    for pattern in patterns:
        if namespace == pattern or fnmatch.fnmatchcase(namespace, pattern):
            return True
    return False
