"""
Top-level package for vc_changelog.

This package generates changelogs from conventional commit messages
and exposes the command line entry point via the ``vc_changelog.cli``
module.
"""

__all__ = ["__version__"]

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pyclog")
except PackageNotFoundError:
    # Fallback when running from a source checkout without installing
    __version__ = "0.1.0.dev0"
