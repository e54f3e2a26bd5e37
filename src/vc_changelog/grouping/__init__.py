"""
Commit classification and grouping.

This package parses raw commit blocks, resolves their prefixes against
the section and component alias tables and groups the result for
rendering. See :mod:`vc_changelog.grouping.commit_parser`,
:mod:`vc_changelog.grouping.classifier` and
:mod:`vc_changelog.grouping.section_map` for details.
"""

from .alias_table import (  # noqa: F401
    BREAKING_SECTION,
    UNKNOWN_SECTION,
    ComponentTable,
    SectionTable,
)
from .classifier import CommitClassifier, resolve_component, resolve_section  # noqa: F401
from .commit_model import CommitEntry, RawCommitRecord  # noqa: F401
from .commit_parser import parse_raw_commit, split_commit_log  # noqa: F401
from .section_map import SectionMap  # noqa: F401
