"""
Git Integration — Candidate enumeration and staging

Two collaborators of the ranking pipeline live here:
- Candidate Source: paths with unstaged changes or untracked files
- Stager: adds exactly one path to the index

Both shell out to the git CLI. The repository root is taken as given:
no discovery of parent directories.
"""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..errors import RepositoryAccessError, PathOutsideRepositoryError, IndexWriteError


# Worktree column (Y of porcelain "XY") states that make a path a candidate
WORKTREE_CHANGED = frozenset("MDTR")
UNTRACKED = "??"

STATUS_ARGS = [
    "status",
    "--porcelain=v1",
    "-z",
    "--untracked-files=all",
    "--ignore-submodules=all",
]


@dataclass(frozen=True)
class WorkingTreeEntry:
    """A working-tree path with pending changes."""
    path: str
    status: str  # porcelain XY code, e.g. " M", "??", " D"
    old_path: Optional[str] = None  # For renames/copies

    @property
    def is_untracked(self) -> bool:
        return self.status == UNTRACKED


def _decode(raw: bytes) -> str:
    # surrogateescape keeps non-UTF-8 paths round-trippable to `git add`
    return raw.decode("utf-8", errors="surrogateescape")


def parse_porcelain_status(output: bytes) -> List[WorkingTreeEntry]:
    """
    Parse `git status --porcelain=v1 -z` output.

    Records are NUL-separated "XY PATH". Renames and copies are followed
    by an extra field holding the original path.
    """
    fields = output.split(b"\0")
    entries = []
    i = 0

    while i < len(fields):
        record = fields[i]
        i += 1
        if len(record) < 4:
            continue

        status = _decode(record[:2])
        path = _decode(record[3:])
        old_path = None
        if status[0] in "RC" or status[1] in "RC":
            if i < len(fields):
                old_path = _decode(fields[i])
            i += 1

        entries.append(WorkingTreeEntry(path=path, status=status, old_path=old_path))

    return entries


class GitIntegration:
    """Git repository integration."""

    def __init__(self, repo_path: Optional[Path] = None):
        """
        Initialize git integration.

        Args:
            repo_path: Repository root. If None, uses current directory.
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        self.git_dir = self.repo_path / ".git"

    @property
    def is_git_repo(self) -> bool:
        """Check if repo_path is a repository root (.git dir, or file for worktrees)."""
        return self.git_dir.exists()

    def _run_git(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a git command, raising CalledProcessError on failure."""
        logger.debug("Running git {} in {}", " ".join(args), self.repo_path)
        return subprocess.run(
            ["git"] + args,
            cwd=self.repo_path,
            capture_output=True,
            check=True
        )

    @staticmethod
    def _stderr(error: subprocess.CalledProcessError) -> str:
        raw = error.stderr or b""
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        return text.strip() or f"git exited with status {error.returncode}"

    # -------------------------------------------------------------------------
    # Candidate Source
    # -------------------------------------------------------------------------

    def list_working_tree_entries(self) -> List[WorkingTreeEntry]:
        """
        Entries that are untracked or have unstaged worktree changes.

        Ignored files, unmodified files and submodules are excluded.

        Raises:
            RepositoryAccessError: If the repository cannot be read
        """
        if not self.is_git_repo:
            raise RepositoryAccessError(
                self.repo_path, "opening git repository",
                "no .git found (run from the repository root)"
            )

        try:
            result = self._run_git(STATUS_ARGS)
        except FileNotFoundError as e:
            raise RepositoryAccessError(self.repo_path, "collecting git statuses", "git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise RepositoryAccessError(self.repo_path, "collecting git statuses", self._stderr(e)) from e

        entries = [
            entry for entry in parse_porcelain_status(result.stdout)
            if entry.is_untracked or entry.status[1] in WORKTREE_CHANGED
        ]
        logger.debug("Found {} unstaged/untracked entr(ies)", len(entries))
        return entries

    def list_working_tree_candidates(self) -> List[str]:
        """Root-relative paths of list_working_tree_entries()."""
        return [entry.path for entry in self.list_working_tree_entries()]

    # -------------------------------------------------------------------------
    # Stager
    # -------------------------------------------------------------------------

    def relative_path(self, path) -> Path:
        """
        Express path relative to the repository root.

        Raises:
            PathOutsideRepositoryError: If path escapes the root
        """
        path = Path(path)

        if path.is_absolute():
            normalized = Path(os.path.normpath(path))
            roots = [Path(os.path.normpath(self.repo_path.absolute())), self.repo_path.resolve()]
            for root in roots:
                try:
                    return normalized.relative_to(root)
                except ValueError:
                    continue
            raise PathOutsideRepositoryError(path, self.repo_path)

        relative = Path(os.path.normpath(path))
        if relative.parts and relative.parts[0] == os.pardir:
            raise PathOutsideRepositoryError(path, self.repo_path)
        return relative

    def stage(self, path) -> Path:
        """
        Add one path to the index. Staging an already-staged path is a no-op.

        Deletions are recorded too (`git add --all`).

        Args:
            path: Root-relative or absolute path inside the repository

        Returns:
            The root-relative path that was staged

        Raises:
            PathOutsideRepositoryError: If path is outside the repository
            IndexWriteError: If the index cannot be updated
        """
        relative = self.relative_path(path)
        if not self.is_git_repo:
            raise IndexWriteError(relative, self.repo_path, "no .git found (run from the repository root)")

        try:
            self._run_git(["add", "--all", "--", relative.as_posix()])
        except FileNotFoundError as e:
            raise IndexWriteError(relative, self.repo_path, "git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise IndexWriteError(relative, self.repo_path, self._stderr(e)) from e

        logger.debug("Staged {}", relative)
        return relative
