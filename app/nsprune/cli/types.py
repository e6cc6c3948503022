"""Shared types and utilities for CLI commands.

This module provides common enums and builders used across multiple
CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from nsprune.cluster.base import ClusterResourceManager
from nsprune.cluster.kubernetes import KubernetesClusterManager
from nsprune.core.classify import ClassificationStrategy
from nsprune.core.config import (
    ConfigError,
    ConfigNotFoundError,
    PruneConfig,
    config_from_env,
    load_config,
)
from nsprune.core.paths import get_config_path
from nsprune.sources.awsed import AwsedEnrollmentSource
from nsprune.sources.base import EnrollmentSource
from nsprune.sources.roster_file import RosterFileSource
from nsprune.utils.formatting import print_error, print_info


class StrategyChoice(str, Enum):
    """Available classification strategies for CLI commands."""

    CONFIG = "config"
    PER_USER = "per_user"
    ROSTER_DIFF = "roster_diff"


def require_config(
    config_path: Path | None = None,
    strategy: StrategyChoice = StrategyChoice.CONFIG,
) -> PruneConfig:
    """Load configuration or exit with a helpful error message.

    When no explicit path is given and the default config file does not
    exist, the configuration is built from defaults and environment
    variables.

    Args:
        config_path: Optional explicit config file path.
        strategy: Strategy override; CONFIG keeps the configured value.

    Returns:
        Loaded configuration.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        try:
            config = load_config(config_path)
        except ConfigNotFoundError:
            if config_path is not None:
                raise
            config = config_from_env()
    except ConfigNotFoundError as e:
        print_error(f"Config not found: {config_path}")
        print_info(f"Run 'nsprune config init' to create one at {get_config_path()}.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e

    if strategy != StrategyChoice.CONFIG:
        config = config.model_copy(update={"strategy": ClassificationStrategy(strategy.value)})
    return config


def build_source(config: PruneConfig, roster_file: Path | None = None) -> EnrollmentSource:
    """Build the enrollment source for a run.

    Args:
        config: Loaded configuration.
        roster_file: Optional local roster file replacing the AWSEd API.

    Returns:
        Enrollment source instance.

    Raises:
        typer.Exit: If the AWSEd source is not configured.
    """
    if roster_file is not None:
        return RosterFileSource(roster_file)
    try:
        return AwsedEnrollmentSource(config)
    except ValueError as e:
        print_error(str(e))
        print_info("Set api_url in the config file or NSPRUNE_API_URL, or pass --roster-file.")
        raise typer.Exit(code=1) from e


def build_cluster(config: PruneConfig) -> ClusterResourceManager:
    """Build the Kubernetes cluster manager for a run.

    Args:
        config: Loaded configuration.

    Returns:
        Cluster manager instance.

    Raises:
        ClusterUnavailable: If no cluster configuration is available.
    """
    return KubernetesClusterManager.from_config(config)
