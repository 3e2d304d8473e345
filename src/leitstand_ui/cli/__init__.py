"""Command line interface."""

from leitstand_ui.cli.main import cli

__all__ = ["cli"]
