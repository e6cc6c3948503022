"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from nsprune.core.config import PruneConfig
from nsprune.core.errors import SourceUnavailable
from nsprune.sources.base import EnrollmentSource


class StubEnrollmentSource(EnrollmentSource):
    """Enrollment source answering from a fixed set of active users."""

    def __init__(self, active: Iterable[str], failing: Iterable[str] = ()) -> None:
        self._active = list(active)
        self._failing = set(failing)
        self.lookups: list[str] = []
        self.roster_fetches = 0
        self.fail_roster = False

    @property
    def name(self) -> str:
        return "stub"

    def list_enrolled_usernames(self) -> list[str]:
        self.roster_fetches += 1
        if self.fail_roster:
            raise SourceUnavailable("roster unavailable")
        return list(self._active)

    def is_user_active(self, username: str) -> bool:
        self.lookups.append(username)
        if username in self._failing:
            raise SourceUnavailable(f"lookup for {username} failed")
        return username in self._active


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config at a temp dir and clear nsprune environment variables."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.delenv("AWSED_API_KEY", raising=False)
    monkeypatch.delenv("NSPRUNE_API_URL", raising=False)
    return xdg


@pytest.fixture
def source_factory() -> Callable[..., StubEnrollmentSource]:
    """Factory for stub enrollment sources."""
    return StubEnrollmentSource


@pytest.fixture
def config() -> PruneConfig:
    """Configuration with two volume suffixes."""
    return PruneConfig(
        api_url="https://awsed.example.edu/api",
        api_key="test-api-key-1234",
        volume_suffixes=("-home", "-datasets"),
    )


@pytest.fixture
def roster_users() -> list[dict[str, object]]:
    """Sample AWSEd roster payload."""
    return [
        {
            "username": "btice",
            "firstName": "brian",
            "lastName": "tice",
            "uid": 130507,
            "enrollments": ["MUS206_WI23_D00"],
        },
        {
            "username": "pbotros",
            "firstName": "peter",
            "lastName": "botros",
            "uid": 130508,
            "enrollments": ["DSC10_WI23_A00", "DSC80_WI23_A00"],
        },
        {
            "username": "n2nazar",
            "firstName": "nadia",
            "lastName": "nazar",
            "uid": 130509,
            "enrollments": ["COGS108_WI23_A00"],
        },
        {
            "username": "tix034",
            "firstName": "tim",
            "lastName": "ix",
            "uid": 130510,
            "enrollments": [],
        },
    ]


@pytest.fixture
def roster_file(tmp_path: Path, roster_users: list[dict[str, object]]) -> Path:
    """Roster JSON file written from roster_users."""
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(roster_users), encoding="utf-8")
    return path
