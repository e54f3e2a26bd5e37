"""
Data models for classified commits.

A :class:`RawCommitRecord` is what the parser extracts from one block of
``git log`` output before any alias resolution. A :class:`CommitEntry`
is the classified, immutable record that is grouped and rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawCommitRecord:
    """Fields pulled out of a raw commit block.

    Attributes
    ----------
    hash : str
        Full revision identifier (first line of the block).
    type_token : str
        Prefix before the colon of the subject line, e.g. ``feat``.
        ``unk`` when the subject line does not follow the convention.
    component_tag : Optional[str]
        Text inside the parentheses of the subject line, ``None`` when
        the subject carries no parenthesis group.
    subject : str
        Everything after the first colon of the subject line.
    closes : Tuple[str, ...]
        Issue numbers referenced by Closes/Fixes/Resolves directives.
    breaks : Tuple[str, ...]
        Issue numbers referenced by Breaks/Broke directives, plus an
        empty string for every bare "breaking" marker.
    """

    hash: str
    type_token: str
    component_tag: Optional[str] = None
    subject: str = ""
    closes: Tuple[str, ...] = field(default_factory=tuple)
    breaks: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CommitEntry:
    """A commit resolved to its canonical section and component."""

    hash: str
    subject: str
    component: str
    section: str
    closes: Tuple[str, ...] = field(default_factory=tuple)
    breaks: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def short_hash(self) -> str:
        return self.hash[:8]

    @property
    def is_breaking(self) -> bool:
        return bool(self.breaks)

    @property
    def breaks_issues(self) -> Tuple[str, ...]:
        """Breaks references without the bare-marker sentinels."""
        return tuple(issue for issue in self.breaks if issue)
