"""
Shared types for changelog writers.

A writer receives the :class:`ReleaseInfo` header data, the section
order taken from the section alias table and the aggregated
:class:`~vc_changelog.grouping.section_map.SectionMap`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, TextIO

from vc_changelog.fmt.link_style import LinkStyle
from vc_changelog.grouping.section_map import SectionMap


class ChangelogFormat(Enum):
    MARKDOWN = "markdown"
    JSON = "json"

    @classmethod
    def parse(cls, value: str) -> "ChangelogFormat":
        normalized = value.strip().lower()
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        valid = ", ".join(fmt.value for fmt in cls)
        raise ValueError(f"unrecognized output format '{value}' (valid values: {valid})")

    def __str__(self) -> str:
        return self.value


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


@dataclass
class ReleaseInfo:
    """Header data for one release block of the changelog.

    Attributes
    ----------
    version : str
        Version label, e.g. ``v1.2.0`` or a short commit hash.
    subtitle : str
        Optional release title shown after the version.
    patch_version : bool
        Patch releases use a smaller Markdown heading.
    date : str
        Release date as ``YYYY-MM-DD`` (UTC today by default).
    repository : str
        Base URL used for commit and issue links.
    link_style : LinkStyle
        URL layout of the hosting service.
    """

    version: str = ""
    subtitle: str = ""
    patch_version: bool = False
    date: str = field(default_factory=_today)
    repository: str = ""
    link_style: LinkStyle = LinkStyle.GITHUB

    def commit_link(self, commit_hash: str) -> str:
        return self.link_style.commit_link(commit_hash, self.repository)

    def issue_link(self, issue: str) -> str:
        return self.link_style.issue_link(issue, self.repository)


class WriterError(Exception):
    """Raised when a writer cannot emit the changelog to its stream."""

    pass


class FormatWriter(ABC):
    """Base class for writers emitting a changelog to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    @abstractmethod
    def write_changelog(
        self,
        release: ReleaseInfo,
        section_order: Iterable[str],
        section_map: SectionMap,
    ) -> None:
        """Write one release block for ``section_map``."""

    def _emit(self, text: str) -> None:
        try:
            self.stream.write(text)
        except OSError as exc:
            raise WriterError(f"cannot write to output stream: {exc}") from exc
