"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``pyclog`` command. It locates the repository,
loads the ``.clog.toml`` configuration, applies command line overrides,
reads and classifies the commit log and writes the changelog.

The changelog itself may go to stdout, so all status output of the
command is written to stderr.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

import click

from vc_changelog import __version__
from vc_changelog.changelog import ChangelogError, ChangelogGenerator, WriteError
from vc_changelog.config.loader import DEFAULT_CONFIG_FILE, ClogConfig, ConfigError, load_config
from vc_changelog.fmt import ChangelogFormat, LinkStyle
from vc_changelog.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests).
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_WRITE_FAILURE = 9


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def locate_repository(
    start_dir: Path,
    work_tree: Optional[Path] = None,
    git_dir: Optional[Path] = None,
) -> Tuple[Path, Optional[Path]]:
    """Resolve the working tree and git directory to read history from.

    An explicit working tree wins; a git directory alone implies its
    parent as working tree. Otherwise the repository containing
    ``start_dir`` is used.

    Raises
    ------
    SystemExit
        With code EXIT_NO_REPO if no repository can be found.
    """
    if work_tree is not None:
        return work_tree, git_dir
    if git_dir is not None:
        return git_dir.resolve().parent, git_dir
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("No Git repository found in current directory or parent directories.")
        raise SystemExit(EXIT_NO_REPO)
    return repo_root, None


def apply_overrides(
    config: ClogConfig,
    repository: Optional[str] = None,
    link_style: Optional[str] = None,
    subtitle: Optional[str] = None,
    outfile: Optional[str] = None,
    infile: Optional[str] = None,
    changelog: Optional[str] = None,
    output_format: Optional[str] = None,
    from_latest_tag: bool = False,
) -> ClogConfig:
    """Return a copy of ``config`` with command line values layered on top."""
    updates = {}
    if repository is not None:
        updates["repository"] = repository
    if link_style is not None:
        updates["link_style"] = LinkStyle.parse(link_style)
    if subtitle is not None:
        updates["subtitle"] = subtitle
    if outfile is not None:
        updates["outfile"] = outfile
    if infile is not None:
        updates["infile"] = infile
    if changelog is not None:
        updates["outfile"] = changelog
        updates["infile"] = changelog
    if output_format is not None:
        updates["output_format"] = ChangelogFormat.parse(output_format)
    if from_latest_tag:
        updates["from_latest_tag"] = True
    return replace(config, **updates)


@click.command()
@click.option("-f", "--from", "from_rev", default="", help="Start of the commit range (hash or tag).")
@click.option("-t", "--to", "to_rev", default="HEAD", show_default=True, help="End of the commit range.")
@click.option("-F", "--from-latest-tag", is_flag=True, help="Start the range at the latest tag.")
@click.option("-r", "--repository", help="Repository URL used for commit and issue links.")
@click.option(
    "-l",
    "--link-style",
    type=click.Choice([style.value for style in LinkStyle], case_sensitive=False),
    help="Hyperlink style of the hosting service.",
)
@click.option("--setversion", "set_version", help="Version label of the release.")
@click.option("-M", "--major", "bump", flag_value="major", help="Bump the major version of the latest tag.")
@click.option("-m", "--minor", "bump", flag_value="minor", help="Bump the minor version of the latest tag.")
@click.option("-p", "--patch", "bump", flag_value="patch", help="Bump the patch version of the latest tag.")
@click.option("-s", "--subtitle", help="Release subtitle.")
@click.option("-o", "--outfile", help="Write the changelog to this file, prepending to its content.")
@click.option("-i", "--infile", help="Append the content of this file after the new release.")
@click.option("-C", "--changelog", help="Read and prepend to this changelog file.")
@click.option(
    "-T",
    "--format",
    "output_format",
    type=click.Choice([fmt.value for fmt in ChangelogFormat], case_sensitive=False),
    help="Output format.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Configuration file (defaults to {DEFAULT_CONFIG_FILE} in the repository root).",
)
@click.option("-g", "--git-dir", type=click.Path(file_okay=False, path_type=Path), help="Git metadata directory.")
@click.option("-w", "--work-tree", type=click.Path(file_okay=False, path_type=Path), help="Git working tree.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="pyclog")
def main(
    from_rev: str,
    to_rev: str,
    from_latest_tag: bool,
    repository: Optional[str],
    link_style: Optional[str],
    set_version: Optional[str],
    bump: Optional[str],
    subtitle: Optional[str],
    outfile: Optional[str],
    infile: Optional[str],
    changelog: Optional[str],
    output_format: Optional[str],
    config_path: Optional[Path],
    git_dir: Optional[Path],
    work_tree: Optional[Path],
    verbose: bool,
) -> None:
    """Generate a changelog from conventional commit messages.

    Commits such as ``feat(cli): add flag`` or ``fix: crash on empty
    input`` are grouped into sections and components and written as
    Markdown or JSON.
    """
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        cwd = Path.cwd()

        # Configuration is looked up before the repository so that it may
        # name the git directory and working tree itself.
        if config_path is None:
            search_root = work_tree or GitClient.find_repo_root(cwd) or cwd
            config_path = search_root / DEFAULT_CONFIG_FILE
        try:
            config = load_config(config_path)
            config = apply_overrides(
                config,
                repository=repository,
                link_style=link_style,
                subtitle=subtitle,
                outfile=outfile,
                infile=infile,
                changelog=changelog,
                output_format=output_format,
                from_latest_tag=from_latest_tag,
            )
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        if config.source is not None:
            print_info(f"Using configuration: {config.source}")

        try:
            repo_root, resolved_git_dir = locate_repository(
                cwd,
                work_tree=work_tree or config.git_work_tree,
                git_dir=git_dir or config.git_dir,
            )
        except SystemExit:
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository: %s (git dir: %s)", repo_root, resolved_git_dir)

        generator = ChangelogGenerator(config, GitClient(repo_root, resolved_git_dir))

        try:
            commits = generator.get_commits(from_rev, to_rev)
            version = generator.resolve_version(set_version, bump)
        except GitError as exc:
            print_error(f"VCS error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)
        except ChangelogError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_GENERIC_ERROR)

        if not commits:
            print_warning("No conventional commits found in the selected range.")
        else:
            print_success(f"Found {len(commits)} commit{'s' if len(commits) != 1 else ''}")

        section_map = generator.build_section_map(commits)
        release = generator.release_info(version, patch_version=bump == "patch")

        try:
            generator.write_changelog(release, section_map)
        except WriteError as exc:
            print_error(f"Failed to write changelog: {exc}")
            raise click.exceptions.Exit(EXIT_WRITE_FAILURE)

        if config.outfile:
            print_success(f"Changelog written to {config.outfile}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
