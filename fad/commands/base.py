"""
BaseCommand — Shared foundation for CLI commands

Provides access to CLI resources via composition.
Commands receive the CLI instance and access its resources through properties.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import FadCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources; they access them via the CLI instance.
    """

    def __init__(self, cli: 'FadCLI'):
        """
        Initialize command with CLI instance.

        Args:
            cli: The main FadCLI instance holding all resources
        """
        self._cli = cli

    @property
    def project_dir(self):
        """Repository root."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def git(self):
        """Git integration (candidate source and stager)."""
        return self._cli.git

    @property
    def matcher(self):
        """Token matcher configured from matching settings."""
        return self._cli.matcher
