"""Abstract base class for enrollment sources.

This module defines the EnrollmentSource interface that every roster
backend must implement.
"""

from abc import ABC, abstractmethod


class EnrollmentSource(ABC):
    """Abstract base class for enrollment sources.

    An enrollment source answers one question: is a user currently
    enrolled? It can answer either for a single user or by returning the
    full roster of enrolled usernames.

    Example:
        >>> source = RosterFileSource(Path("roster.json"))
        >>> if not source.is_user_active("dvader"):
        ...     print("dvader is stale")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short human-readable name for this source."""

    @abstractmethod
    def list_enrolled_usernames(self) -> list[str]:
        """Return the username of every user in the enrollment roster.

        Returns:
            List of usernames.

        Raises:
            SourceUnavailable: If the roster cannot be fetched or parsed.
        """

    @abstractmethod
    def is_user_active(self, username: str) -> bool:
        """Check whether a user is currently enrolled.

        Args:
            username: Username to look up.

        Returns:
            True if the user should be kept, False if the user's
            resources are stale (unknown user or no enrollments).

        Raises:
            SourceUnavailable: If the source cannot be queried.
        """
