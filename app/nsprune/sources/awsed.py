"""AWSEd enrollment source.

Queries the AWSEd REST API for enrolled users. Authentication uses the
``Authorization: AWSEd api_key=<key>`` header, built from the config
when the source is constructed.
"""

import logging
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from nsprune.core.config import PruneConfig
from nsprune.core.errors import SourceUnavailable
from nsprune.models.roster import ROSTER_ADAPTER, EnrolledUser
from nsprune.sources.base import EnrollmentSource

logger = logging.getLogger(__name__)


class AwsedEnrollmentSource(EnrollmentSource):
    """Enrollment source backed by the AWSEd HTTP API.

    Endpoints:
        GET {api_url}/enrollments?env={environment}  -> list of users
        GET {api_url}/users/{username}               -> single user (404 if unknown)
    """

    def __init__(
        self,
        config: PruneConfig,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            config: Configuration providing api_url, api_key and timeout.
            session: Optional requests session (a new one is created if None).

        Raises:
            ValueError: If the config has no api_url.
        """
        if not config.api_url:
            msg = "AWSEd api_url is not configured"
            raise ValueError(msg)
        if not config.api_key:
            logger.warning("No AWSEd API key configured; requests will likely be rejected")

        self._base_url = config.api_url
        self._environment = config.environment
        self._timeout = config.timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": config.authorization_header})

    @property
    def name(self) -> str:
        """Return the source name."""
        return "awsed"

    def _get(self, path: str, params: dict[str, str] | None = None) -> requests.Response:
        url = f"{self._base_url}{path}"
        try:
            return self._session.get(url, params=params, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            raise SourceUnavailable(f"AWSEd request to {url} failed: {e}") from e

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise SourceUnavailable(f"AWSEd returned a non-JSON payload: {e}") from e

    def list_enrolled_usernames(self) -> list[str]:
        """Fetch the usernames of every user in the configured environment's roster.

        Returns:
            Usernames in the order returned by the API.

        Raises:
            SourceUnavailable: On network errors, HTTP errors or malformed payloads.
        """
        response = self._get("/enrollments", params={"env": self._environment})
        if not response.ok:
            msg = f"AWSEd roster request failed with HTTP {response.status_code}"
            raise SourceUnavailable(msg)

        try:
            users = ROSTER_ADAPTER.validate_python(self._json(response))
        except ValidationError as e:
            raise SourceUnavailable(f"Malformed AWSEd roster payload: {e}") from e

        logger.debug("Fetched %d users from AWSEd", len(users))
        return [user.username for user in users]

    def is_user_active(self, username: str) -> bool:
        """Look up a single user's enrollments.

        Args:
            username: Username to look up.

        Returns:
            True if the user exists and has at least one enrollment.

        Raises:
            SourceUnavailable: On network errors, HTTP errors other than 404,
                or malformed payloads.
        """
        response = self._get(f"/users/{quote(username, safe='')}")
        if response.status_code == 404:
            logger.debug("User %s not found in AWSEd", username)
            return False
        if not response.ok:
            msg = f"AWSEd lookup for {username} failed with HTTP {response.status_code}"
            raise SourceUnavailable(msg)

        try:
            user = EnrolledUser.model_validate(self._json(response))
        except ValidationError as e:
            raise SourceUnavailable(f"Malformed AWSEd user payload for {username}: {e}") from e

        return user.is_enrolled
