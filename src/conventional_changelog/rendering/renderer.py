"""
Rendering of classified commits into changelog text.

:func:`group_sections` buckets classified commits into ordered sections and
:func:`render` serializes those sections, plus an optional version heading,
using the templates of the selected :class:`~.formats.Format`.

Output lines are joined with ``"\\n "``. Downstream consumers compare the
result byte for byte, so the blank separator line holding a single space and
the leading space before every line after the first must be kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from conventional_changelog.grouping.commit_model import (
    ClassifiedCommit,
    Commit,
    Section,
    SectionKind,
)

from .formats import FORMATS, Format, FormatTemplates


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


LINE_SEPARATOR = "\n "


@dataclass(frozen=True)
class RenderOptions:
    """Display settings for :func:`render`.

    Attributes
    ----------
    display_title : bool
        Emit the ``<version> (<title>) (<date>)`` heading.
    display_author : bool
        Append `` - <author>`` to every commit line.
    display_links : bool
        Append the commit link after every subject.
    format : Format
        Output format.
    title : str
        Text placed in the first parentheses of the heading.
    commit_url : str
        Prefix of commit links; the target is ``<commit_url>/<long_hash>``.
    section_titles : Mapping[SectionKind, str]
        Overrides for the default section headings.
    order : Optional[Sequence[SectionKind]]
        Sections to render and their order. ``None`` renders every section
        in the default order.
    """

    display_title: bool = True
    display_author: bool = False
    display_links: bool = True
    format: Format = Format.MARKDOWN
    title: str = ""
    commit_url: str = ""
    section_titles: Mapping[SectionKind, str] = field(default_factory=dict)
    order: Optional[Sequence[SectionKind]] = None

    def section_title(self, kind: SectionKind) -> str:
        return self.section_titles.get(kind, kind.default_title)

    def section_order(self) -> List[SectionKind]:
        if self.order is None:
            return list(SectionKind)
        return list(dict.fromkeys(self.order))


def group_sections(
    commits: Iterable[ClassifiedCommit],
    options: Optional[RenderOptions] = None,
) -> List[Section]:
    """Group classified commits into non-empty sections.

    Sections follow the configured order regardless of input order; within a
    section commits keep their input order and exact duplicates are dropped.
    """
    options = options or RenderOptions()
    buckets: Dict[SectionKind, List[Commit]] = {}
    for entry in commits:
        bucket = buckets.setdefault(entry.kind, [])
        if entry.commit in bucket:
            logger.debug("Dropping duplicate commit %s in %s", entry.commit.short_hash, entry.kind.name)
            continue
        bucket.append(entry.commit)

    return [
        Section(kind=kind, title=options.section_title(kind), commits=buckets[kind])
        for kind in options.section_order()
        if buckets.get(kind)
    ]


def render_commit(commit: Commit, options: RenderOptions, templates: FormatTemplates) -> str:
    """Render one ``- [scope] subject [(link)] [- author]`` line."""
    parts = ["-"]
    if commit.scope:
        parts.append(templates.scope.format(scope=commit.scope))
    if commit.subject:
        parts.append(commit.subject)
    if options.display_links:
        parts.append(
            templates.link.format(
                url=options.commit_url.rstrip("/"),
                long_hash=commit.long_hash,
                short_hash=commit.short_hash,
            )
        )
    line = " ".join(parts)
    if options.display_author:
        line += f" - {commit.author}"
    return line


def render(
    commits: Iterable[ClassifiedCommit],
    version: str,
    options: Optional[RenderOptions] = None,
    today: Optional[Callable[[], date]] = None,
) -> str:
    """Render classified commits as changelog text.

    Parameters
    ----------
    commits : Iterable[ClassifiedCommit]
        Classifier output, in the order the commits were supplied.
    version : str
        Version shown in the heading.
    options : RenderOptions, optional
        Display settings; defaults to Markdown with title and links.
    today : Callable[[], date], optional
        Clock supplying the heading date. Defaults to :meth:`date.today`.

    Returns
    -------
    str
        The changelog, without a trailing newline.
    """
    options = options or RenderOptions()
    templates = FORMATS[options.format]
    lines: List[str] = []

    if options.display_title:
        clock = today or date.today
        text = f"{version} ({options.title}) ({clock().isoformat()})"
        lines.append(templates.header.format(text=text))
        lines.append("")

    for section in group_sections(commits, options):
        lines.append(templates.section_title.format(title=section.title))
        lines.extend(render_commit(commit, options, templates) for commit in section.commits)
        lines.append("")

    if lines and lines[-1] == "":
        lines.pop()
    return LINE_SEPARATOR.join(lines)
