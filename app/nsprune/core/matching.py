"""Name comparison helpers.

Plain string-set utilities shared by the classification strategies.
Comparison is always exact and case-sensitive.
"""

from collections.abc import Sequence


def contains(needle: str, haystack: Sequence[str]) -> bool:
    """Check whether a name appears in a sequence of names.

    Args:
        needle: Name to look for.
        haystack: Names to search.

    Returns:
        True if an element of haystack equals needle exactly.
    """
    for value in haystack:
        if value == needle:
            return True
    return False


def set_difference(reference: Sequence[str], candidates: Sequence[str]) -> list[str]:
    """Return every candidate that is not present in the reference.

    The relative order of ``candidates`` is preserved, so the result is
    stable for a given listing. Used by the roster-diff strategy to find
    namespaces whose owner is missing from the enrollment roster.

    Args:
        reference: Names that are known to be valid (e.g. the roster).
        candidates: Names to check (e.g. live namespaces).

    Returns:
        Candidates not found in reference, in their original order.
    """
    known = set(reference)
    return [name for name in candidates if name not in known]
