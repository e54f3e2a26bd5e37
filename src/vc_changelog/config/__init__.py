"""
Configuration loading for vc_changelog.

Provides a loader for the ``.clog.toml`` file in the repository root.
See :mod:`vc_changelog.config.loader` for implementation details.
"""

from .loader import ClogConfig, ConfigError, load_config  # noqa: F401
