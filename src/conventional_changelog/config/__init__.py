"""
Configuration loading for conventional_changelog.

Provides a loader for the optional ``.changelog.json`` file in the
repository root. See :mod:`conventional_changelog.config.loader` for
implementation details.
"""

from .loader import ChangelogConfig, ConfigError, load_config  # noqa: F401
