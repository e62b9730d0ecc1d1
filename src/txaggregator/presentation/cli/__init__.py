"""Command-line interface."""

from txaggregator.presentation.cli.app import app, cli

__all__ = [
    "app",
    "cli",
]
