"""
Hyperlink styles for commit and issue references.

Each hosting service lays out its commit and issue URLs differently.
When no repository URL is configured, links degrade to the bare issue
number or the short commit hash.
"""

from __future__ import annotations

from enum import Enum


class LinkStyle(Enum):
    GITHUB = "github"
    GITLAB = "gitlab"
    STASH = "stash"
    CGIT = "cgit"

    @classmethod
    def parse(cls, value: str) -> "LinkStyle":
        """Parse a link style name, ignoring case.

        Raises
        ------
        ValueError
            If ``value`` does not name a known style.
        """
        normalized = value.strip().lower()
        for style in cls:
            if style.value == normalized:
                return style
        valid = ", ".join(style.value for style in cls)
        raise ValueError(f"unrecognized link-style '{value}' (valid values: {valid})")

    def issue_link(self, issue: str, repo: str) -> str:
        if not repo:
            return issue
        if self in (LinkStyle.GITHUB, LinkStyle.GITLAB):
            return f"{repo}/issues/{issue}"
        # Stash and cgit have no issue tracker URL scheme
        return issue

    def commit_link(self, commit_hash: str, repo: str) -> str:
        if not repo:
            return commit_hash[:8]
        if self is LinkStyle.STASH:
            return f"{repo}/commits/{commit_hash}"
        if self is LinkStyle.CGIT:
            return f"{repo}/commit/?id={commit_hash}"
        return f"{repo}/commit/{commit_hash}"

    def __str__(self) -> str:
        return self.value
