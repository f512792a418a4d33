"""Command-line interface for podscaffold."""

from podscaffold.cli.app import app

__all__ = ["app"]
