"""Allow running nsprune as ``python -m nsprune``."""

from nsprune.cli.main import app

if __name__ == "__main__":
    app()
