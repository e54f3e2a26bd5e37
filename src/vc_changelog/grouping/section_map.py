"""
Aggregation of classified commits into the changelog grouping.

The :class:`SectionMap` is a two-level grouping: section name, then
component name, then the commits in input order. Commits that carry a
breaking-change reference are additionally listed under the synthetic
``Breaking Changes`` section. Renderers walk the map through
:meth:`SectionMap.ordered_sections`, which applies the section order of
the alias table and sorts components by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from vc_changelog.grouping.alias_table import BREAKING_SECTION
from vc_changelog.grouping.commit_model import CommitEntry


ComponentMap = Dict[str, List[CommitEntry]]


@dataclass
class SectionMap:
    """Mapping of section -> component -> commits.

    Attributes
    ----------
    sections : Dict[str, ComponentMap]
        Buckets created lazily on first insert. A section that received
        no commits is absent, not empty.
    """

    sections: Dict[str, ComponentMap] = field(default_factory=dict)

    @classmethod
    def from_commits(cls, entries: Iterable[CommitEntry]) -> "SectionMap":
        """Group ``entries`` by section and component in a single pass."""
        section_map = cls()
        for entry in entries:
            section_map._add(entry.section, entry)
            if entry.is_breaking:
                section_map._add(BREAKING_SECTION, entry)
        return section_map

    def _add(self, section: str, entry: CommitEntry) -> None:
        components = self.sections.setdefault(section, {})
        components.setdefault(entry.component, []).append(entry)

    def total_entries(self) -> int:
        return sum(
            len(entries)
            for components in self.sections.values()
            for entries in components.values()
        )

    def is_empty(self) -> bool:
        return not self.sections

    def ordered_sections(
        self, section_order: Iterable[str]
    ) -> Iterator[Tuple[str, List[Tuple[str, List[CommitEntry]]]]]:
        """Yield the sections to render, in ``section_order``.

        Sections without commits are skipped. Components are sorted by
        name, so the unlabeled ``""`` bucket comes first.
        """
        for name in section_order:
            components = self.sections.get(name)
            if not components:
                continue
            yield name, sorted(components.items(), key=lambda item: item[0])
