"""
JSON changelog writer.

The document has a ``header`` object and a ``sections`` list (``null``
when no section has commits). Every commit carries its component
(``null`` when unlabeled), subject, commit link and the closes/breaks
issue references (``null`` when there are none).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from vc_changelog.fmt.base import FormatWriter, ReleaseInfo
from vc_changelog.grouping.commit_model import CommitEntry
from vc_changelog.grouping.section_map import SectionMap


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def _issue_value(issue: str) -> Any:
    return int(issue) if issue.isdigit() else issue


class JsonWriter(FormatWriter):
    """Write a changelog release block as a single JSON object."""

    def __init__(self, stream, indent: Optional[int] = None) -> None:
        super().__init__(stream)
        self.indent = indent

    def build_document(
        self,
        release: ReleaseInfo,
        section_order: Iterable[str],
        section_map: SectionMap,
    ) -> Dict[str, Any]:
        sections: List[Dict[str, Any]] = []
        for title, components in section_map.ordered_sections(section_order):
            commits = [
                self._commit_object(release, component, entry)
                for component, entries in components
                for entry in entries
            ]
            sections.append({"title": title, "commits": commits})
        return {
            "header": {
                "version": release.version,
                "patch_version": release.patch_version,
                "subtitle": release.subtitle or None,
                "date": release.date,
            },
            "sections": sections or None,
        }

    def write_changelog(
        self,
        release: ReleaseInfo,
        section_order: Iterable[str],
        section_map: SectionMap,
    ) -> None:
        document = self.build_document(release, section_order, section_map)
        logger.debug("Writing JSON changelog with %d section(s)", len(document["sections"] or []))
        self._emit(json.dumps(document, indent=self.indent))
        self.stream.flush()

    def _commit_object(self, release: ReleaseInfo, component: str, entry: CommitEntry) -> Dict[str, Any]:
        # a breaking commit without issue numbers still gets an (empty) list
        breaks: Optional[List[Dict[str, Any]]] = None
        if entry.is_breaking:
            breaks = self._issue_objects(release, entry.breaks_issues)
        return {
            "component": component or None,
            "subject": entry.subject.strip(),
            "commit_link": release.commit_link(entry.hash),
            "closes": self._issue_objects(release, entry.closes) if entry.closes else None,
            "breaks": breaks,
        }

    @staticmethod
    def _issue_objects(release: ReleaseInfo, issues: Iterable[str]) -> List[Dict[str, Any]]:
        return [
            {"issue": _issue_value(issue), "issue_link": release.issue_link(issue)}
            for issue in issues
        ]
