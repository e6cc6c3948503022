"""Unit tests for prune command.

Tests for the CLI prune command, run against an in-memory cluster and a
local roster file.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from nsprune.cli.main import app
from nsprune.cluster.memory import InMemoryClusterManager
from nsprune.core.errors import ClusterUnavailable
from nsprune.models.resource import ResourceKind
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config file with two volume suffixes."""
    path = tmp_path / "config.toml"
    path.write_text('volume_suffixes = ["-home", "-datasets"]\n')
    return path


@pytest.fixture
def cluster() -> InMemoryClusterManager:
    """Cluster with two enrolled users and one former user."""
    names = ["btice", "pbotros", "dvader"]
    return InMemoryClusterManager(
        namespaces=names,
        volumes=[f"{n}{s}" for n in names for s in ("-home", "-datasets")],
    )


def _invoke(args: list[str], cluster: InMemoryClusterManager):
    with patch("nsprune.cli.commands.prune.build_cluster", return_value=cluster):
        return runner.invoke(app, ["prune", *args])


class TestPruneCommandHelp:
    """Tests for prune command help."""

    def test_prune_help(self) -> None:
        """Prune command shows help."""
        result = runner.invoke(app, ["prune", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.stdout
        assert "--roster-file" in result.stdout


class TestPruneCommand:
    """Tests for prune command execution."""

    def test_dry_run_changes_nothing(
        self, cluster: InMemoryClusterManager, config_file: Path, roster_file: Path
    ) -> None:
        """--dry-run reports planned deletions without touching the cluster."""
        result = _invoke(["--dry-run", "-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 0
        assert "will delete namespace dvader" in result.stdout
        assert "will delete volume dvader-home" in result.stdout
        assert "Dry-run mode" in result.stdout
        assert cluster.mutating_calls == []
        assert "dvader" in cluster.namespaces

    def test_live_run_deletes_stale(
        self, cluster: InMemoryClusterManager, config_file: Path, roster_file: Path
    ) -> None:
        """A live run removes only the former user's resources."""
        result = _invoke(["-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 0
        assert "deleted namespace dvader" in result.stdout
        assert cluster.namespaces == ["btice", "pbotros"]
        assert not [v for v in cluster.volumes if v.startswith("dvader")]

    def test_missing_volume_reported(
        self, config_file: Path, roster_file: Path
    ) -> None:
        """Absent volumes are skipped with a notice."""
        cluster = InMemoryClusterManager(namespaces=["dvader"], volumes=["dvader-home"])

        result = _invoke(["-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 0
        assert "volume dvader-datasets does not exist" in result.stdout
        assert cluster.volumes == []

    def test_nothing_to_do(self, config_file: Path, roster_file: Path) -> None:
        """A clean cluster reports that nothing is stale."""
        cluster = InMemoryClusterManager(namespaces=["btice", "kube-system"])

        result = _invoke(["-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 0
        assert "Nothing to do" in result.stdout

    def test_roster_diff_strategy(
        self, cluster: InMemoryClusterManager, config_file: Path, roster_file: Path
    ) -> None:
        """--strategy roster_diff yields the same outcome."""
        result = _invoke(
            ["-c", str(config_file), "-r", str(roster_file), "--strategy", "roster_diff"],
            cluster,
        )

        assert result.exit_code == 0
        assert cluster.namespaces == ["btice", "pbotros"]

    def test_delete_failure_exits_1(
        self, cluster: InMemoryClusterManager, config_file: Path, roster_file: Path
    ) -> None:
        """A rejected delete aborts the run with exit code 1."""
        cluster.fail_delete(ResourceKind.NAMESPACE, "dvader")

        result = _invoke(["-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 1
        assert "Failed to delete namespace dvader" in result.output
        assert "dvader-home" in cluster.volumes

    def test_listing_failure_exits_1(
        self, cluster: InMemoryClusterManager, config_file: Path, roster_file: Path
    ) -> None:
        """An unreachable cluster aborts the run."""
        cluster.fail_listing()

        result = _invoke(["-c", str(config_file), "-r", str(roster_file)], cluster)

        assert result.exit_code == 1
        assert "Reconciliation aborted" in result.output

    def test_missing_roster_file_exits_1(
        self, cluster: InMemoryClusterManager, config_file: Path, tmp_path: Path
    ) -> None:
        """An unreadable roster aborts before anything is deleted."""
        missing = tmp_path / "missing.json"

        result = _invoke(["-c", str(config_file), "-r", str(missing)], cluster)

        assert result.exit_code == 1
        assert cluster.mutating_calls == []

    def test_cluster_config_unavailable(self, config_file: Path, roster_file: Path) -> None:
        """Failing to build the cluster client exits 1."""
        with patch(
            "nsprune.cli.commands.prune.build_cluster",
            side_effect=ClusterUnavailable("No kubernetes configuration available"),
        ):
            result = runner.invoke(
                app, ["prune", "-c", str(config_file), "-r", str(roster_file)]
            )

        assert result.exit_code == 1

    def test_missing_explicit_config(self, tmp_path: Path, roster_file: Path) -> None:
        """An explicit config path that does not exist exits 1."""
        result = runner.invoke(
            app, ["prune", "-c", str(tmp_path / "nope.toml"), "-r", str(roster_file)]
        )

        assert result.exit_code == 1
        assert "Config not found" in result.output

    def test_missing_api_url(self, config_file: Path) -> None:
        """Without a roster file, the AWSEd URL must be configured."""
        result = runner.invoke(app, ["prune", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "api_url is not configured" in result.output

    def test_default_config_from_env(
        self,
        cluster: InMemoryClusterManager,
        roster_file: Path,
    ) -> None:
        """Without a config file, defaults are used."""
        result = _invoke(["--dry-run", "-r", str(roster_file)], cluster)

        assert result.exit_code == 0
        # Default suffix list applies
        assert "dvader-dsmlp-datasets" in result.stdout
