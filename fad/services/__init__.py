"""
Services — External integration layer for git-fad

- Git: working-tree status (candidates) and index writes (staging)
"""

from .git import GitIntegration, WorkingTreeEntry, parse_porcelain_status

__all__ = [
    "GitIntegration", "WorkingTreeEntry", "parse_porcelain_status",
]
