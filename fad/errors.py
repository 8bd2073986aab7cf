"""
Errors — Failure taxonomy for git-fad

Collaborator failures (repository and index I/O) are fatal and carry
enough context to diagnose: which path, which operation.

A query that matches nothing is NOT an error. It is reported through
QueryOutcome (see core/pipeline.py) and exits successfully.
"""

from pathlib import Path
from typing import Optional


class FadError(Exception):
    """Base class for fatal git-fad errors."""


class RepositoryAccessError(FadError):
    """Repository cannot be opened or its status cannot be read."""

    def __init__(self, repo_path: Path, operation: str, detail: Optional[str] = None):
        self.repo_path = Path(repo_path)
        self.operation = operation
        self.detail = detail
        message = f"{operation} for repository {self.repo_path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PathOutsideRepositoryError(FadError):
    """A path to stage resolves outside the repository root."""

    def __init__(self, path: Path, repo_path: Path):
        self.path = Path(path)
        self.repo_path = Path(repo_path)
        super().__init__(f"path {self.path} is not inside repository {self.repo_path}")


class IndexWriteError(FadError):
    """Staging a path into the index failed."""

    def __init__(self, path: Path, repo_path: Path, detail: Optional[str] = None):
        self.path = Path(path)
        self.repo_path = Path(repo_path)
        self.detail = detail
        message = f"adding {self.path} to index of repository {self.repo_path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedPatternError(FadError):
    """
    Glob token could not be compiled.

    Recovered by the token matcher: the token simply matches nothing.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"malformed glob pattern '{pattern}': {reason}")
