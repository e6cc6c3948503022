"""CLI commands for nsprune.

This package contains all subcommand implementations.
"""

from nsprune.cli.commands import config, prune, stale

__all__ = ["config", "prune", "stale"]
