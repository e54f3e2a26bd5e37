"""
Git client implementation for vc_changelog.

This module wraps the Git operations the changelog generator needs:
reading the filtered commit log for a revision range and looking up
tags and the current HEAD. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from vc_changelog.grouping.commit_parser import LOG_FORMAT


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


BREAKING_MARKER = "BREAKING"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


def build_grep_pattern(aliases: Iterable[str]) -> str:
    """Build the extended regex used to pre-filter the commit log.

    Every alias matches at the start of a message line; the breaking
    marker matches anywhere. Git is asked to match case-insensitively.
    """
    parts = [f"^{re.escape(alias)}" for alias in aliases if alias]
    parts.append(BREAKING_MARKER)
    return "|".join(parts)


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path, git_dir: Optional[Path] = None) -> None:
        self.repo_root = repo_root
        self.git_dir = git_dir

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is inside a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _location_args(self) -> List[str]:
        if self.git_dir is None:
            return []
        return [f"--git-dir={self.git_dir}", f"--work-tree={self.repo_root}"]

    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be started, or if the command exits with a
            non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + self._location_args() + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError(f"Failed to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_log(self, grep: str, revision_range: str = "HEAD", log_format: str = LOG_FORMAT) -> str:
        """Return the raw log text for ``revision_range``.

        Parameters
        ----------
        grep : str
            Extended regex matched case-insensitively against the commit
            message; only matching commits are listed.
        revision_range : str
            ``HEAD`` or a ``from..to`` range.
        log_format : str
            ``--format`` string; the default emits hash, subject, body
            and the block delimiter.

        Raises
        ------
        GitError
            If ``git log`` fails, e.g. for an unknown revision.
        """
        result = self._run(
            [
                "log",
                "-E",
                "-i",
                f"--grep={grep}",
                f"--format={log_format}",
                revision_range,
            ],
            check=True,
        )
        return result.stdout

    def get_latest_tag(self) -> str:
        """Return the hash of the most recently tagged commit ('' if untagged)."""
        result = self._run(["rev-list", "--tags", "--max-count=1"], check=False)
        return result.stdout.strip()

    def get_latest_tag_version(self) -> str:
        """Return the name of the latest reachable tag ('' if untagged)."""
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        return result.stdout.strip()

    def get_last_commit(self) -> str:
        """Return the full hash of HEAD."""
        result = self._run(["rev-parse", "HEAD"], check=True)
        return result.stdout.strip()
