"""
Alias tables mapping commit prefixes to changelog sections and components.

Sections form a closed, ordered enumeration: the order of the
:class:`SectionTable` is the order in which sections are rendered.
Components are free-form labels, so the :class:`ComponentTable` only
provides optional long names for short tags used in commit subjects.

Both tables are immutable values. Layering configuration on top of the
defaults always produces a fresh table via ``with_overrides``.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


UNKNOWN_SECTION = "Unknown"
UNKNOWN_ALIAS = "unk"
BREAKING_SECTION = "Breaking Changes"

DEFAULT_SECTIONS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Features", ("ft", "feat")),
    ("Bug Fixes", ("fx", "fix")),
    ("Performance", ("perf",)),
    (UNKNOWN_SECTION, (UNKNOWN_ALIAS,)),
    (BREAKING_SECTION, ("breaks",)),
)


def _find_duplicates(entries: Iterable[Tuple[str, FrozenSet[str]]]) -> Dict[str, List[str]]:
    claims: Dict[str, List[str]] = {}
    for name, aliases in entries:
        for alias in sorted(aliases):
            claims.setdefault(alias, []).append(name)
    return {alias: names for alias, names in claims.items() if len(names) > 1}


class SectionTable:
    """Ordered mapping of canonical section names to their trigger aliases.

    The reserved ``Unknown`` section is always present. If the given
    entries do not declare it, it is appended with its default alias.
    """

    def __init__(self, entries: Optional[Iterable[Tuple[str, Iterable[str]]]] = None) -> None:
        if entries is None:
            entries = DEFAULT_SECTIONS
        ordered: Dict[str, FrozenSet[str]] = {}
        for name, aliases in entries:
            ordered[name] = frozenset(aliases)
        if UNKNOWN_SECTION not in ordered:
            ordered[UNKNOWN_SECTION] = frozenset({UNKNOWN_ALIAS})
        self._entries: Tuple[Tuple[str, FrozenSet[str]], ...] = tuple(ordered.items())

    @classmethod
    def default(cls) -> "SectionTable":
        return cls(DEFAULT_SECTIONS)

    def with_overrides(self, overrides: Mapping[str, Iterable[str]]) -> "SectionTable":
        """Return a new table with ``overrides`` layered on top of this one.

        Existing sections keep their position and take the new aliases.
        Sections not yet known are appended in the order given. The
        ``Unknown`` section cannot be re-aliased and is left untouched.
        """
        merged: Dict[str, FrozenSet[str]] = dict(self._entries)
        for name, aliases in overrides.items():
            if name == UNKNOWN_SECTION:
                logger.warning("Ignoring aliases configured for reserved section '%s'", name)
                continue
            merged[name] = frozenset(aliases)
        return SectionTable(merged.items())

    def names(self) -> List[str]:
        return [name for name, _ in self._entries]

    def aliases_for(self, name: str) -> FrozenSet[str]:
        for section, aliases in self._entries:
            if section == name:
                return aliases
        raise KeyError(name)

    def all_aliases(self) -> List[str]:
        """Return every alias, sections in table order, aliases sorted."""
        result: List[str] = []
        for _, aliases in self._entries:
            result.extend(sorted(aliases))
        return result

    def duplicate_aliases(self) -> Dict[str, List[str]]:
        """Map each alias claimed by more than one section to those sections."""
        return _find_duplicates(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, FrozenSet[str]]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(section == name for section, _ in self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SectionTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"SectionTable({[(n, sorted(a)) for n, a in self._entries]!r})"


class ComponentTable:
    """Mapping of canonical component names to their trigger aliases."""

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        self._entries: Dict[str, FrozenSet[str]] = {
            name: frozenset(aliases) for name, aliases in (entries or {}).items()
        }

    def with_overrides(self, overrides: Mapping[str, Iterable[str]]) -> "ComponentTable":
        merged: Dict[str, FrozenSet[str]] = dict(self._entries)
        for name, aliases in overrides.items():
            merged[name] = frozenset(aliases)
        return ComponentTable(merged)

    def names(self) -> List[str]:
        return list(self._entries)

    def duplicate_aliases(self) -> Dict[str, List[str]]:
        return _find_duplicates(self._entries.items())

    def __iter__(self) -> Iterator[Tuple[str, FrozenSet[str]]]:
        return iter(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        entries = {name: sorted(aliases) for name, aliases in self._entries.items()}
        return f"ComponentTable({entries!r})"
