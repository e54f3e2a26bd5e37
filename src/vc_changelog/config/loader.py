"""
Configuration loader for vc_changelog.

The tool reads an optional TOML file, ``.clog.toml`` in the repository
root by default. A ``[clog]`` table holds the output preferences, while
optional ``[sections]`` and ``[components]`` tables map canonical names
to lists of aliases, layered on top of the built-in defaults::

    [clog]
    repository = "https://github.com/owner/project"
    link-style = "github"
    changelog = "CHANGELOG.md"

    [sections]
    Documentation = ["docs", "doc"]

    [components]
    "Command Line" = ["cli"]

A missing file is not an error: the defaults are used. A file that
cannot be read or parsed, or whose values are of the wrong type, raises
:class:`ConfigError`. So does an alias claimed by two sections or two
components.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from vc_changelog.fmt.base import ChangelogFormat
from vc_changelog.fmt.link_style import LinkStyle
from vc_changelog.grouping.alias_table import ComponentTable, SectionTable


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. Explicit configuration
# in the CLI still surfaces these messages.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_CONFIG_FILE = ".clog.toml"

_STRING_KEYS = (
    "repository",
    "subtitle",
    "link-style",
    "changelog",
    "outfile",
    "infile",
    "output-format",
    "git-dir",
    "git-work-tree",
)


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


@dataclass
class ClogConfig:
    """Validated changelog settings.

    Attributes
    ----------
    repository : str
        Base URL of the hosted repository, used for hyperlinks.
    subtitle : str
        Release title shown next to the version.
    link_style : LinkStyle
        URL layout for commit and issue links.
    outfile : Optional[str]
        File the changelog is written to (stdout when unset).
    infile : Optional[str]
        File whose content is appended after the new release block.
    output_format : ChangelogFormat
        Markdown or JSON.
    from_latest_tag : bool
        Start the revision range at the latest tag.
    git_dir : Optional[Path]
        Git metadata directory, when not ``<work tree>/.git``.
    git_work_tree : Optional[Path]
        Working tree of the project.
    sections : SectionTable
        Section aliases, defaults plus configured overrides.
    components : ComponentTable
        Component aliases.
    source : Optional[Path]
        The file the settings were read from, if any.
    """

    repository: str = ""
    subtitle: str = ""
    link_style: LinkStyle = LinkStyle.GITHUB
    outfile: Optional[str] = None
    infile: Optional[str] = None
    output_format: ChangelogFormat = ChangelogFormat.MARKDOWN
    from_latest_tag: bool = False
    git_dir: Optional[Path] = None
    git_work_tree: Optional[Path] = None
    sections: SectionTable = field(default_factory=SectionTable.default)
    components: ComponentTable = field(default_factory=ComponentTable)
    source: Optional[Path] = None


def _alias_overrides(data: Dict[str, Any], table_name: str) -> Dict[str, List[str]]:
    table = data.get(table_name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"'[{table_name}]' must be a table")
    overrides: Dict[str, List[str]] = {}
    for name, aliases in table.items():
        if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
            raise ConfigError(f"'{table_name}.{name}' must be a list of strings")
        overrides[name] = aliases
    return overrides


def _check_unique(kind: str, duplicates: Mapping[str, List[str]]) -> None:
    if duplicates:
        details = "; ".join(
            f"'{alias}' used by {', '.join(names)}" for alias, names in sorted(duplicates.items())
        )
        raise ConfigError(f"Ambiguous {kind} aliases: {details}")


def parse_config(data: Dict[str, Any], source: Optional[Path] = None) -> ClogConfig:
    """Validate parsed TOML ``data`` and build a :class:`ClogConfig`.

    Raises
    ------
    ConfigError
        If the ``[clog]`` table is missing or any value is invalid.
    """
    clog_table = data.get("clog")
    if not isinstance(clog_table, dict):
        raise ConfigError("Missing '[clog]' table in configuration file")

    for key in _STRING_KEYS:
        if key in clog_table and not isinstance(clog_table[key], str):
            raise ConfigError(f"'{key}' must be a string")
    if "from-latest-tag" in clog_table and not isinstance(clog_table["from-latest-tag"], bool):
        raise ConfigError("'from-latest-tag' must be a boolean")

    config = ClogConfig(source=source)
    config.repository = clog_table.get("repository", "")
    config.subtitle = clog_table.get("subtitle", "")
    config.from_latest_tag = clog_table.get("from-latest-tag", False)
    config.outfile = clog_table.get("outfile")
    config.infile = clog_table.get("infile")

    try:
        config.link_style = LinkStyle.parse(clog_table.get("link-style", "github"))
        config.output_format = ChangelogFormat.parse(clog_table.get("output-format", "markdown"))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    # 'changelog' is shorthand for reading and prepending to the same file
    changelog = clog_table.get("changelog")
    if changelog:
        config.outfile = changelog
        config.infile = changelog

    if "git-dir" in clog_table:
        config.git_dir = Path(clog_table["git-dir"])
    if "git-work-tree" in clog_table:
        config.git_work_tree = Path(clog_table["git-work-tree"])

    config.sections = SectionTable.default().with_overrides(_alias_overrides(data, "sections"))
    config.components = ComponentTable(_alias_overrides(data, "components"))
    _check_unique("section", config.sections.duplicate_aliases())
    _check_unique("component", config.components.duplicate_aliases())
    return config


def load_config(config_path: Optional[Path] = None, repo_root: Optional[Path] = None) -> ClogConfig:
    """Load the changelog configuration and return it.

    Parameters
    ----------
    config_path : Optional[Path]
        Explicit configuration file. Relative paths are taken from the
        current directory.
    repo_root : Optional[Path]
        Directory searched for ``.clog.toml`` when ``config_path`` is
        not given. Defaults to the current directory.

    Returns
    -------
    ClogConfig
        Settings from the file, or the defaults if the file is missing.

    Raises
    ------
    ConfigError
        If the file exists but cannot be read, parsed or validated.
    """
    if config_path is None:
        config_path = (repo_root or Path.cwd()) / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        logger.debug("Configuration file '%s' not found, using defaults", config_path)
        return ClogConfig()

    try:
        with config_path.open("rb") as handle:
            data: Dict[str, Any] = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid TOML in {config_path.name}: {exc}") from exc

    config = parse_config(data, source=config_path)
    logger.debug("Loaded changelog configuration from: %s", config_path)
    logger.debug("Sections: %s", config.sections.names())
    return config
