"""Roster file enrollment source.

Reads enrolled users from a local JSON file with the same shape as the
AWSEd roster payload. Useful for offline runs and tests.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from nsprune.core.errors import SourceUnavailable
from nsprune.models.roster import ROSTER_ADAPTER, EnrolledUser
from nsprune.sources.base import EnrollmentSource

logger = logging.getLogger(__name__)


class RosterFileSource(EnrollmentSource):
    """Enrollment source backed by a JSON roster file.

    The file is read lazily on first use and cached for the lifetime of
    the source, so one run sees one consistent roster.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the source.

        Args:
            path: Path to a JSON array of user records.
        """
        self._path = path
        self._users: dict[str, EnrolledUser] | None = None

    @property
    def name(self) -> str:
        """Return the source name."""
        return f"roster-file:{self._path}"

    def _load(self) -> dict[str, EnrolledUser]:
        if self._users is not None:
            return self._users

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SourceUnavailable(f"Roster file not found: {self._path}") from e
        except json.JSONDecodeError as e:
            raise SourceUnavailable(f"Invalid JSON in roster file {self._path}: {e}") from e
        except OSError as e:
            raise SourceUnavailable(f"Failed to read roster file {self._path}: {e}") from e

        try:
            users = ROSTER_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise SourceUnavailable(f"Malformed roster file {self._path}: {e}") from e

        self._users = {user.username: user for user in users}
        logger.debug("Loaded %d users from %s", len(self._users), self._path)
        return self._users

    def list_enrolled_usernames(self) -> list[str]:
        """Return every username in the file, in file order.

        Presence in the roster is what counts here; the enrollment list
        only matters for single-user lookups.
        """
        return list(self._load())

    def is_user_active(self, username: str) -> bool:
        """Check whether a user is in the file with a non-empty enrollment list."""
        user = self._load().get(username)
        return user is not None and user.is_enrolled
