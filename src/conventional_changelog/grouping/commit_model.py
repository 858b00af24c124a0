"""
Data models for commit classification.

A :class:`RawCommitRecord` is the delimited line produced by the commit
source, pipe-delimited unless the source says otherwise. The classifier turns it into one or two :class:`Commit` objects, each
tagged with the :class:`SectionKind` it is rendered under.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


FIELD_SEPARATOR = "|"


class SectionKind(Enum):
    """Changelog sections, declared in display order."""

    FEATURES = "feat"
    BUG_FIXES = "fix"
    PERFORMANCE = "perf"
    REVERTS = "revert"
    BREAKING_CHANGES = "breaking"
    DOCUMENTATION = "docs"
    STYLES = "style"
    CODE_REFACTORING = "refactor"
    TESTS = "test"
    OTHER = "other"

    @property
    def default_title(self) -> str:
        return DEFAULT_SECTION_TITLES[self]

    @classmethod
    def from_name(cls, name: str) -> "SectionKind":
        """Resolve a type token (``fix``) or member name (``BUG_FIXES``).

        Raises
        ------
        ValueError
            If ``name`` matches no section.
        """
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown section: {name!r}") from None


DEFAULT_SECTION_TITLES = {
    SectionKind.FEATURES: "Features",
    SectionKind.BUG_FIXES: "Bug fixes",
    SectionKind.PERFORMANCE: "Performance improvements",
    SectionKind.REVERTS: "Reverts",
    SectionKind.BREAKING_CHANGES: "BREAKING CHANGES",
    SectionKind.DOCUMENTATION: "Documentation",
    SectionKind.STYLES: "Styles",
    SectionKind.CODE_REFACTORING: "Code refactoring",
    SectionKind.TESTS: "Tests",
    SectionKind.OTHER: "Other work",
}


def format_timestamp(timestamp: str) -> str:
    """Return ``YYYY-MM-DD`` for a Unix epoch string, else the input unchanged."""
    value = timestamp.strip()
    if not value.isdigit():
        return timestamp
    try:
        moment = datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return timestamp
    return moment.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class RawCommitRecord:
    """A commit as delivered by the commit source."""

    subject: str
    body: str = ""
    long_hash: str = ""
    short_hash: str = ""
    author: str = ""
    timestamp: str = ""

    @classmethod
    def parse(cls, line: str, separator: str = FIELD_SEPARATOR) -> "RawCommitRecord":
        """Parse ``subject|body|long_hash|short_hash|author|timestamp``.

        The subject is the first field and the hashes, author and timestamp
        are the last four, so a body containing the separator survives
        intact. A subject containing it does not: the subject is cut at the
        first separator and the rest joins the body. Sources that control
        the format pass a ``separator`` that cannot occur in commit text.
        A five-field line has no timestamp; shorter lines leave the missing
        trailing fields empty.
        """
        parts = line.split(separator)
        if len(parts) >= 6:
            long_hash, short_hash, author, timestamp = parts[-4:]
            body = separator.join(parts[1:-4])
            return cls(parts[0], body, long_hash, short_hash, author, timestamp)
        parts += [""] * (6 - len(parts))
        return cls(*parts)


@dataclass(frozen=True)
class Commit:
    """A classified commit ready for rendering."""

    type: SectionKind
    subject: str
    long_hash: str
    short_hash: str
    author: str
    date: str
    scope: Optional[str] = None
    is_breaking: bool = False
    breaking_subject: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit tagged with the section it is rendered under."""

    commit: Commit
    kind: SectionKind


@dataclass(frozen=True)
class Section:
    """Representation of one rendered changelog section.

    Attributes
    ----------
    kind : SectionKind
        The section category.
    title : str
        Human-readable heading.
    commits : List[Commit]
        Commits in the order they were supplied.
    """

    kind: SectionKind
    title: str
    commits: List[Commit]
