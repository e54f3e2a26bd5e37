"""
Markdown changelog writer.

Output for one release looks like::

    <a name="v1.2.0"></a>
    ## v1.2.0 Codename (2024-05-01)


    #### Features

    * **cli:** add flag ([0123abcd](https://host/repo/commit/0123abcd...), closes [#5](...))
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from vc_changelog.fmt.base import FormatWriter, ReleaseInfo
from vc_changelog.grouping.commit_model import CommitEntry
from vc_changelog.grouping.section_map import SectionMap


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class MarkdownWriter(FormatWriter):
    """Write a changelog release block as Markdown."""

    def write_changelog(
        self,
        release: ReleaseInfo,
        section_order: Iterable[str],
        section_map: SectionMap,
    ) -> None:
        self._write_header(release)
        for title, components in section_map.ordered_sections(section_order):
            logger.debug("Writing section: %s", title)
            self._write_section(release, title, components)
        self.stream.flush()

    def _write_header(self, release: ReleaseInfo) -> None:
        heading = "###" if release.patch_version else "##"
        title = " ".join(part for part in (release.version, release.subtitle) if part)
        self._emit(f'<a name="{release.version}"></a>\n{heading} {title} ({release.date})\n\n')

    def _write_section(self, release: ReleaseInfo, title: str, components: List) -> None:
        self._emit(f"\n#### {title}\n\n")
        for component, entries in components:
            nested = bool(component) and len(entries) > 1
            if nested:
                self._emit(f"* **{component}:**\n")
                prefix = "  *"
            elif component:
                prefix = f"* **{component}:**"
            else:
                prefix = "*"
            for entry in entries:
                self._emit(f"{prefix} {self._format_entry(release, entry)}\n")

    def _format_entry(self, release: ReleaseInfo, entry: CommitEntry) -> str:
        line = f"{entry.subject.strip()} ([{entry.short_hash}]({release.commit_link(entry.hash)})"
        if entry.closes:
            line += ", closes " + self._issue_links(release, entry.closes)
        # bare "breaking" markers carry no issue number to link
        breaks = entry.breaks_issues
        if breaks:
            line += ", breaks " + self._issue_links(release, breaks)
        return line + ")"

    @staticmethod
    def _issue_links(release: ReleaseInfo, issues: Iterable[str]) -> str:
        return ", ".join(f"[#{issue}]({release.issue_link(issue)})" for issue in issues)
