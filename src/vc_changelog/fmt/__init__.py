"""
Changelog writers.

Two output formats are supported: Markdown (the default) and JSON.
Use :func:`get_writer` to build the writer for a configured format.
"""

from __future__ import annotations

from typing import TextIO

from .base import ChangelogFormat, FormatWriter, ReleaseInfo, WriterError  # noqa: F401
from .json_writer import JsonWriter  # noqa: F401
from .link_style import LinkStyle  # noqa: F401
from .markdown_writer import MarkdownWriter  # noqa: F401


def get_writer(fmt: ChangelogFormat, stream: TextIO) -> FormatWriter:
    """Return the writer for ``fmt`` wrapping ``stream``."""
    if fmt is ChangelogFormat.JSON:
        return JsonWriter(stream)
    return MarkdownWriter(stream)
