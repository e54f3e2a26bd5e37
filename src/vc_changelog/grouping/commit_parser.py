"""
Parsing of raw ``git log`` commit blocks.

Each block produced by the commit source has the hash on its first
line, the subject on its second and the body on the remaining lines.
The subject is expected to follow the ``type(component): subject``
convention; the body is scanned for issue directives such as
``Closes #12, #34`` or ``Breaks #7`` and for a bare "breaking" marker.

Parsing is total: a block that does not follow the convention yields a
record with the ``unk`` type token and empty fields instead of raising,
so a single unconventional commit cannot abort changelog generation.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from vc_changelog.grouping.alias_table import UNKNOWN_ALIAS
from vc_changelog.grouping.commit_model import RawCommitRecord


COMMIT_DELIMITER = "==END=="
LOG_FORMAT = f"%H%n%s%n%b%n{COMMIT_DELIMITER}"

SUBJECT_RE = re.compile(r"^([^:(]+?)(?:\(([^)]*?)?\))?:(.*)")
CLOSES_RE = re.compile(r"(?:Closes|Fixes|Resolves)\s((?:#\d+(?:,\s)?)+)")
BREAKS_RE = re.compile(r"(?:Breaks|Broke)\s((?:#\d+(?:,\s)?)+)")
BREAKING_RE = re.compile(r"breaking", re.IGNORECASE)
ISSUE_RE = re.compile(r"#(\d+)")


def _directive_refs(pattern: re.Pattern, line: str) -> List[str]:
    refs: List[str] = []
    for match in pattern.finditer(line):
        refs.extend(ISSUE_RE.findall(match.group(1)))
    return refs


def parse_subject(line: str) -> Tuple[str, Optional[str], str]:
    """Split a subject line into ``(type_token, component_tag, subject)``.

    Lines that do not follow the convention give ``("unk", None, "")``.
    """
    match = SUBJECT_RE.match(line)
    if match is None:
        return UNKNOWN_ALIAS, None, ""
    return match.group(1), match.group(2), match.group(3)


def scan_body(lines: List[str]) -> Tuple[List[str], List[str]]:
    """Collect closes and breaks references from the body lines."""
    closes: List[str] = []
    breaks: List[str] = []
    for line in lines:
        closes.extend(_directive_refs(CLOSES_RE, line))
        if BREAKS_RE.search(line):
            breaks.extend(_directive_refs(BREAKS_RE, line))
        elif BREAKING_RE.search(line):
            breaks.append("")
    return closes, breaks


def parse_raw_commit(raw_block: str) -> RawCommitRecord:
    """Parse one commit block into a :class:`RawCommitRecord`.

    Parameters
    ----------
    raw_block : str
        Hash line, subject line and body lines of a single commit,
        without the trailing delimiter.

    Returns
    -------
    RawCommitRecord
        The extracted fields. Never raises.
    """
    lines = raw_block.splitlines()
    commit_hash = lines[0] if lines else ""
    if len(lines) > 1:
        type_token, component_tag, subject = parse_subject(lines[1])
    else:
        type_token, component_tag, subject = UNKNOWN_ALIAS, None, ""
    closes, breaks = scan_body(lines[2:])
    return RawCommitRecord(
        hash=commit_hash,
        type_token=type_token,
        component_tag=component_tag,
        subject=subject,
        closes=tuple(closes),
        breaks=tuple(breaks),
    )


def split_commit_log(text: str) -> List[str]:
    """Split commit source output into raw blocks.

    Blocks are separated by a line holding only the delimiter. Blank
    blocks (such as the remainder after the final delimiter) are
    dropped.
    """
    separator = f"\n{COMMIT_DELIMITER}\n"
    normalized = text.replace("\r\n", "\n")
    if normalized.endswith(f"\n{COMMIT_DELIMITER}"):
        normalized += "\n"
    return [block for block in normalized.split(separator) if block.strip()]
