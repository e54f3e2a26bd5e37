"""
Resolution of commit prefixes to canonical sections and components.

Sections and components follow different defaulting rules. A type token
that no section claims resolves to the ``Unknown`` section, which is
later dropped from the changelog. A component tag that no component
claims is kept verbatim, since components are free-form labels.

When an alias is claimed by more than one entry the first match wins:
table order for sections, insertion order for components. The
configuration loader rejects such tables, so this only matters for
tables built programmatically.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from vc_changelog.grouping.alias_table import UNKNOWN_SECTION, ComponentTable, SectionTable
from vc_changelog.grouping.commit_model import CommitEntry, RawCommitRecord
from vc_changelog.grouping.commit_parser import parse_raw_commit, split_commit_log


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def resolve_section(type_token: str, sections: SectionTable) -> str:
    """Return the canonical section for ``type_token``.

    The table is scanned in order and the first section whose aliases
    contain the token (exact, case-sensitive) wins. ``Unknown`` is
    returned when nothing matches.
    """
    for name, aliases in sections:
        if type_token in aliases:
            return name
    return UNKNOWN_SECTION


def resolve_component(component_tag: Optional[str], components: ComponentTable) -> str:
    """Return the canonical component for ``component_tag``.

    Unclaimed tags pass through unchanged; a missing tag gives ``""``.
    """
    if component_tag is None:
        return ""
    for name, aliases in components:
        if component_tag in aliases:
            return name
    return component_tag


class CommitClassifier:
    """Turn raw commit blocks into classified :class:`CommitEntry` values."""

    def __init__(
        self,
        sections: Optional[SectionTable] = None,
        components: Optional[ComponentTable] = None,
    ) -> None:
        self.sections = sections if sections is not None else SectionTable.default()
        self.components = components if components is not None else ComponentTable()

    def classify(self, record: RawCommitRecord) -> CommitEntry:
        return CommitEntry(
            hash=record.hash,
            subject=record.subject,
            component=resolve_component(record.component_tag, self.components),
            section=resolve_section(record.type_token, self.sections),
            closes=record.closes,
            breaks=record.breaks,
        )

    def parse(self, raw_block: str) -> CommitEntry:
        return self.classify(parse_raw_commit(raw_block))

    def parse_blocks(self, blocks: Iterable[str]) -> List[CommitEntry]:
        """Classify ``blocks`` in order, dropping ``Unknown`` entries."""
        entries: List[CommitEntry] = []
        for block in blocks:
            entry = self.parse(block)
            if entry.section == UNKNOWN_SECTION:
                logger.debug("Skipping unclassified commit %s", entry.hash or "<no hash>")
                continue
            entries.append(entry)
        return entries

    def parse_log(self, log_text: str) -> List[CommitEntry]:
        """Split commit source output and classify every block."""
        return self.parse_blocks(split_commit_log(log_text))
