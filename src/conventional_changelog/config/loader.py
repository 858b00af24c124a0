"""
Configuration loader for conventional_changelog.

The tool reads an optional JSON configuration file named ``.changelog.json``
located in the repository root, or any file passed explicitly. This loader
validates the structure of the configuration and returns the render options
it describes.

If an explicitly requested file is missing, or any file is malformed or has
fields of the wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from conventional_changelog.grouping.commit_model import SectionKind
from conventional_changelog.rendering.formats import Format
from conventional_changelog.rendering.renderer import RenderOptions


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. When the CLI configures
# logging, messages still appear.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = ".changelog.json"

_BOOL_KEYS = ("display_title", "display_author", "display_links")
_STR_KEYS = ("format", "title", "commit_url")
_KNOWN_KEYS = set(_BOOL_KEYS) | set(_STR_KEYS) | {"sections", "order", "ignore_scopes"}


class ConfigError(Exception):
    """Raised when the changelog configuration file is missing or invalid."""

    pass


@dataclass(frozen=True)
class ChangelogConfig:
    """Validated configuration.

    Attributes
    ----------
    options : RenderOptions
        Display settings for the renderer.
    ignore_scopes : Tuple[str, ...]
        Commit scopes left out of the changelog.
    source : Optional[Path]
        File the configuration was read from, ``None`` for defaults.
    """

    options: RenderOptions = field(default_factory=RenderOptions)
    ignore_scopes: Tuple[str, ...] = ()
    source: Optional[Path] = None


def _parse_section(name: Any, key: str) -> SectionKind:
    if not isinstance(name, str):
        raise ConfigError(f"'{key}' entries must be strings")
    try:
        return SectionKind.from_name(name)
    except ValueError as exc:
        raise ConfigError(f"Invalid '{key}' entry: {exc}") from exc


def _parse_str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return value


def parse_config(data: Dict[str, Any], source: Optional[Path] = None) -> ChangelogConfig:
    """Validate a decoded configuration mapping.

    Raises
    ------
    ConfigError
        If a key has the wrong type or names an unknown format or section.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", unknown)

    for key in _BOOL_KEYS:
        if key in data and not isinstance(data[key], bool):
            raise ConfigError(f"'{key}' must be a boolean")
    for key in _STR_KEYS:
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"'{key}' must be a string")

    kwargs: Dict[str, Any] = {key: data[key] for key in _BOOL_KEYS + ("title", "commit_url") if key in data}

    if "format" in data:
        try:
            kwargs["format"] = Format.from_name(data["format"])
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    if "sections" in data:
        sections = data["sections"]
        if not isinstance(sections, dict):
            raise ConfigError("'sections' must be an object")
        titles = {}
        for name, title in sections.items():
            if not isinstance(title, str):
                raise ConfigError(f"Title of section '{name}' must be a string")
            titles[_parse_section(name, "sections")] = title
        kwargs["section_titles"] = titles

    if "order" in data:
        if not isinstance(data["order"], list):
            raise ConfigError("'order' must be a list of section names")
        kwargs["order"] = tuple(_parse_section(name, "order") for name in data["order"])

    ignore_scopes: Tuple[str, ...] = ()
    if "ignore_scopes" in data:
        ignore_scopes = tuple(_parse_str_list(data, "ignore_scopes"))

    return ChangelogConfig(options=RenderOptions(**kwargs), ignore_scopes=ignore_scopes, source=source)


def load_config(repo_root: Optional[Path] = None, config_path: Optional[Path] = None) -> ChangelogConfig:
    """Load the changelog configuration and return it.

    Args:
        repo_root: Repository whose ``.changelog.json`` is read when
                   ``config_path`` is not given. A missing file there means
                   default settings.
        config_path: Explicit configuration file. It must exist.

    Returns:
        The validated :class:`ChangelogConfig`.

    Raises:
        ConfigError: If an explicit file is missing, or the file is malformed
                     or invalid.
    """
    if config_path is None:
        if repo_root is None:
            return ChangelogConfig()
        path = repo_root / CONFIG_FILE_NAME
        if not path.exists():
            logger.debug("No configuration file at '%s'; using defaults", path)
            return ChangelogConfig()
    else:
        path = config_path
        if not path.exists():
            logger.error("Configuration file '%s' does not exist", path)
            raise ConfigError(f"Missing changelog configuration file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc

    config = parse_config(data, source=path)
    logger.debug("Loaded changelog configuration from: %s", path)
    return config
