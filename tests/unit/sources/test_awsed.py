"""Unit tests for AwsedEnrollmentSource.

Tests for the AWSEd HTTP enrollment source, using a mocked requests session.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from nsprune.core.config import PruneConfig
from nsprune.core.errors import SourceUnavailable
from nsprune.sources.awsed import AwsedEnrollmentSource


def _response(status_code: int = 200, payload: Any = None) -> MagicMock:
    """Build a fake requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


class TestAwsedEnrollmentSource:
    """Tests for AwsedEnrollmentSource class."""

    @pytest.fixture
    def session(self) -> MagicMock:
        """Mocked requests session."""
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    @pytest.fixture
    def source(self, config: PruneConfig, session: MagicMock) -> AwsedEnrollmentSource:
        """Source wired to the mocked session."""
        return AwsedEnrollmentSource(config, session=session)

    def test_name(self, source: AwsedEnrollmentSource) -> None:
        """Source reports its name."""
        assert source.name == "awsed"

    def test_requires_api_url(self) -> None:
        """A config without api_url is rejected."""
        with pytest.raises(ValueError, match="api_url is not configured"):
            AwsedEnrollmentSource(PruneConfig(api_key="k"))

    def test_sets_authorization_header(
        self, source: AwsedEnrollmentSource, session: MagicMock
    ) -> None:
        """The AWSEd authorization header comes from the config."""
        assert session.headers["Authorization"] == "AWSEd api_key=test-api-key-1234"

    def test_missing_key_warns(
        self, session: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A missing API key is logged but not fatal."""
        AwsedEnrollmentSource(PruneConfig(api_url="https://awsed.example.edu"), session=session)
        assert "No AWSEd API key" in caplog.text

    def test_roster_request(
        self,
        source: AwsedEnrollmentSource,
        session: MagicMock,
        roster_users: list[dict[str, object]],
    ) -> None:
        """The roster is fetched from /enrollments with the environment."""
        session.get.return_value = _response(payload=roster_users)

        usernames = source.list_enrolled_usernames()

        session.get.assert_called_once_with(
            "https://awsed.example.edu/api/enrollments",
            params={"env": "dsmlp"},
            timeout=30.0,
        )
        assert usernames == ["btice", "pbotros", "n2nazar", "tix034"]

    def test_roster_http_error(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """Non-2xx roster responses raise SourceUnavailable."""
        session.get.return_value = _response(status_code=503)

        with pytest.raises(SourceUnavailable, match="HTTP 503"):
            source.list_enrolled_usernames()

    def test_roster_malformed(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """A payload that is not a user list raises SourceUnavailable."""
        session.get.return_value = _response(payload={"error": "nope"})

        with pytest.raises(SourceUnavailable, match="Malformed AWSEd roster"):
            source.list_enrolled_usernames()

    def test_roster_not_json(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """A non-JSON body raises SourceUnavailable."""
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        with pytest.raises(SourceUnavailable, match="non-JSON"):
            source.list_enrolled_usernames()

    def test_connection_error(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """Network errors raise SourceUnavailable."""
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(SourceUnavailable, match="refused"):
            source.list_enrolled_usernames()

    def test_user_active(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """A user with enrollments is active."""
        session.get.return_value = _response(
            payload={"username": "btice", "enrollments": ["MUS206_WI23_D00"]}
        )

        assert source.is_user_active("btice") is True
        session.get.assert_called_once_with(
            "https://awsed.example.edu/api/users/btice",
            params=None,
            timeout=30.0,
        )

    def test_user_without_enrollments(
        self, source: AwsedEnrollmentSource, session: MagicMock
    ) -> None:
        """A known user with no enrollments is not active."""
        session.get.return_value = _response(payload={"username": "tix034", "enrollments": []})

        assert source.is_user_active("tix034") is False

    def test_user_not_found(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """HTTP 404 means the user is not active."""
        session.get.return_value = _response(status_code=404)

        assert source.is_user_active("dvader") is False

    def test_user_http_error(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """Other HTTP errors raise SourceUnavailable."""
        session.get.return_value = _response(status_code=500)

        with pytest.raises(SourceUnavailable, match="HTTP 500"):
            source.is_user_active("btice")

    def test_user_malformed(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """An invalid user payload raises SourceUnavailable."""
        session.get.return_value = _response(payload={"enrollments": ["X"]})

        with pytest.raises(SourceUnavailable, match="Malformed AWSEd user payload"):
            source.is_user_active("btice")

    def test_username_is_quoted(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """Usernames are URL-quoted in the path."""
        session.get.return_value = _response(status_code=404)

        source.is_user_active("a/b")

        assert session.get.call_args.args[0] == "https://awsed.example.edu/api/users/a%2Fb"

    def test_timeout_error(self, source: AwsedEnrollmentSource, session: MagicMock) -> None:
        """Timeouts raise SourceUnavailable."""
        session.get.side_effect = requests.exceptions.Timeout("timed out")

        with pytest.raises(SourceUnavailable):
            source.is_user_active("btice")
