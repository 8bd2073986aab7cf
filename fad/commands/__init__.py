"""
Commands — CLI command implementations

Each command is a BaseCommand subclass holding a reference to the CLI
instance and reaching shared resources (config, git, matcher) through it.
"""

from .base import BaseCommand
from .add_cmd import AddCommand

__all__ = ['BaseCommand', 'AddCommand']
