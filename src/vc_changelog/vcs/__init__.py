"""
Version control system (VCS) integration.

This package contains the Git client used as the commit source: it
lists the commits of a revision range that plausibly follow the commit
convention and resolves tags and HEAD for version labels.
"""

from .git_client import GitClient, GitError, build_grep_pattern  # noqa: F401
