"""
Per-format decoration templates.

Every output format is described by the same handful of ``str.format``
templates, so the grouping and ordering logic in
:mod:`conventional_changelog.rendering.renderer` is shared by all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Format(Enum):
    """Supported changelog output formats."""

    MARKDOWN = "markdown"
    PLAIN = "plain"
    SLACK = "slack"

    @classmethod
    def from_name(cls, name: str) -> "Format":
        """Resolve a case-insensitive format name.

        Raises
        ------
        ValueError
            If the name is not a supported format.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown format {name!r}; expected one of: {choices}") from None


@dataclass(frozen=True)
class FormatTemplates:
    """Decoration templates for one output format.

    Attributes
    ----------
    header : str
        Wraps the ``{text}`` of the version heading.
    section_title : str
        Wraps a section ``{title}``.
    scope : str
        Renders a commit ``{scope}`` prefix.
    link : str
        Renders the commit link from ``{url}``, ``{long_hash}`` and
        ``{short_hash}``.
    """

    header: str
    section_title: str
    scope: str
    link: str


FORMATS: Dict[Format, FormatTemplates] = {
    Format.MARKDOWN: FormatTemplates(
        header="# {text}",
        section_title="### {title}",
        scope="**{scope}:**",
        link="([{short_hash}]({url}/{long_hash}))",
    ),
    Format.PLAIN: FormatTemplates(
        header="{text}",
        section_title="{title}:",
        scope="{scope}:",
        link="({url}/{long_hash})",
    ),
    Format.SLACK: FormatTemplates(
        header="*{text}*",
        section_title="*{title}*",
        scope="*{scope}:*",
        link="(<{url}/{long_hash}|{short_hash}>)",
    ),
}
