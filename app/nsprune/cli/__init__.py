"""CLI package for nsprune.

This package contains the Typer application and all subcommands.
"""

from nsprune.cli.main import app

__all__ = ["app"]
