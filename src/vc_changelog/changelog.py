"""
Changelog generation.

This module provides the :class:`ChangelogGenerator` class, which reads
the commit log through a :class:`~vc_changelog.vcs.git_client.GitClient`,
classifies every commit against the configured alias tables, groups the
result into a :class:`~vc_changelog.grouping.section_map.SectionMap` and
hands it to the writer for the configured output format.

New release blocks are prepended to existing changelog data:

- with an output file, the old data comes from the input file if one is
  configured, otherwise from the output file itself;
- with only an input file, the new block and the input file content are
  written to stdout;
- with neither, the new block goes to stdout.
"""

from __future__ import annotations

import io
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from vc_changelog.config.loader import ClogConfig
from vc_changelog.fmt import ReleaseInfo, WriterError, get_writer
from vc_changelog.grouping.classifier import CommitClassifier
from vc_changelog.grouping.commit_model import CommitEntry
from vc_changelog.grouping.section_map import SectionMap
from vc_changelog.vcs.git_client import GitClient, build_grep_pattern


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


RELEASE_SEPARATOR = "\n\n\n"
BUMP_PARTS = ("major", "minor", "patch")

_VERSION_RE = re.compile(r"^(v?)(\d+)(?:\.(\d+))?(?:\.(\d+))?")


class ChangelogError(Exception):
    """Raised when the changelog cannot be produced."""

    pass


class WriteError(ChangelogError):
    """Raised when the changelog output cannot be created or written."""

    pass


def bump_version(tag: str, part: str) -> str:
    """Increment one part of a ``[v]MAJOR.MINOR.PATCH`` tag.

    An empty tag counts as ``0.0.0``. A leading ``v`` is preserved and
    any pre-release or build suffix is dropped.

    Raises
    ------
    ChangelogError
        If ``part`` is unknown or ``tag`` is not a version number.
    """
    if part not in BUMP_PARTS:
        raise ChangelogError(f"Unknown version part '{part}'")
    tag = tag.strip()
    if not tag:
        prefix, major, minor, patch = "", 0, 0, 0
    else:
        match = _VERSION_RE.match(tag)
        if match is None:
            raise ChangelogError(f"Latest tag '{tag}' is not a version number")
        prefix = match.group(1)
        major, minor, patch = (int(group or 0) for group in match.group(2, 3, 4))

    if part == "major":
        major, minor, patch = major + 1, 0, 0
    elif part == "minor":
        minor, patch = minor + 1, 0
    else:
        patch += 1
    return f"{prefix}{major}.{minor}.{patch}"


def _read_existing(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
    except OSError as exc:
        logger.warning("Could not read existing changelog '%s': %s", path, exc)
        return ""


class ChangelogGenerator:
    """Generate a changelog release block from a Git history."""

    def __init__(self, config: ClogConfig, git_client: GitClient) -> None:
        self.config = config
        self.git_client = git_client
        self.classifier = CommitClassifier(config.sections, config.components)

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------
    def grep_pattern(self) -> str:
        return build_grep_pattern(self.config.sections.all_aliases())

    @staticmethod
    def revision_range(from_rev: str = "", to_rev: str = "HEAD") -> str:
        if not from_rev:
            return "HEAD"
        return f"{from_rev}..{to_rev or 'HEAD'}"

    def get_commits(self, from_rev: str = "", to_rev: str = "HEAD") -> List[CommitEntry]:
        """Return the classified commits of the range, newest first.

        When ``from_rev`` is empty and the configuration asks for it, the
        range starts at the latest tag.

        Raises
        ------
        GitError
            If the log cannot be read.
        """
        if not from_rev and self.config.from_latest_tag:
            from_rev = self.git_client.get_latest_tag()
            logger.debug("Starting from latest tag: %s", from_rev or "<none>")
        revision_range = self.revision_range(from_rev, to_rev)
        log_text = self.git_client.get_log(self.grep_pattern(), revision_range)
        commits = self.classifier.parse_log(log_text)
        logger.info("Classified %d commit(s) in %s", len(commits), revision_range)
        return commits

    def build_section_map(self, commits: Optional[List[CommitEntry]] = None) -> SectionMap:
        if commits is None:
            commits = self.get_commits()
        return SectionMap.from_commits(commits)

    # ------------------------------------------------------------------
    # Release metadata
    # ------------------------------------------------------------------
    def resolve_version(self, explicit: Optional[str] = None, bump: Optional[str] = None) -> str:
        """Return the version label for the release.

        An explicit label wins. Otherwise ``bump`` increments the latest
        tag, and without either the short hash of HEAD is used.
        """
        if explicit:
            return explicit
        if bump:
            return bump_version(self.git_client.get_latest_tag_version(), bump)
        return self.git_client.get_last_commit()[:8]

    def release_info(
        self,
        version: str,
        subtitle: Optional[str] = None,
        patch_version: bool = False,
    ) -> ReleaseInfo:
        return ReleaseInfo(
            version=version,
            subtitle=self.config.subtitle if subtitle is None else subtitle,
            patch_version=patch_version,
            repository=self.config.repository,
            link_style=self.config.link_style,
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def render(self, release: ReleaseInfo, section_map: SectionMap) -> str:
        """Render one release block in the configured format."""
        buffer = io.StringIO()
        writer = get_writer(self.config.output_format, buffer)
        try:
            writer.write_changelog(release, self.config.sections.names(), section_map)
        except WriterError as exc:
            raise WriteError(str(exc)) from exc
        return buffer.getvalue()

    def write_changelog(
        self,
        release: ReleaseInfo,
        section_map: SectionMap,
        stdout: Optional[TextIO] = None,
    ) -> None:
        """Write the release block according to the configured files."""
        if self.config.outfile:
            self.write_changelog_to(Path(self.config.outfile), release, section_map)
        elif self.config.infile:
            self.write_changelog_from(Path(self.config.infile), release, section_map, stdout)
        else:
            self._emit(stdout or sys.stdout, self.render(release, section_map))

    def write_changelog_to(self, outfile: Path, release: ReleaseInfo, section_map: SectionMap) -> None:
        """Prepend the release block to ``outfile``, creating it if needed."""
        source = Path(self.config.infile) if self.config.infile else outfile
        old = _read_existing(source)
        content = self._merge(self.render(release, section_map), old)
        try:
            outfile.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write changelog '%s': %s", outfile, exc)
            raise WriteError(f"cannot create output file {outfile}: {exc}") from exc
        logger.info("Wrote changelog to %s", outfile)

    def write_changelog_from(
        self,
        infile: Path,
        release: ReleaseInfo,
        section_map: SectionMap,
        stdout: Optional[TextIO] = None,
    ) -> None:
        """Write the release block followed by ``infile``'s content to stdout."""
        content = self._merge(self.render(release, section_map), _read_existing(infile))
        self._emit(stdout or sys.stdout, content)

    @staticmethod
    def _merge(new: str, old: str) -> str:
        if not old:
            return new
        return new + RELEASE_SEPARATOR + old

    @staticmethod
    def _emit(stream: TextIO, content: str) -> None:
        try:
            stream.write(content)
            stream.flush()
        except OSError as exc:
            raise WriteError(f"cannot write to output stream: {exc}") from exc
