"""
Conventional Commit classification of raw commit records.

The classifier is total: every record resolves either to nothing (merge
commits and ignored scopes) or to one or two tagged commits. A subject that
does not follow the ``type(scope): description`` convention is never an
error; it lands in the ``Other work`` section verbatim.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Union

from .commit_model import (
    ClassifiedCommit,
    Commit,
    RawCommitRecord,
    SectionKind,
    format_timestamp,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


BREAKING_CHANGE_MARKER = "BREAKING CHANGE:"
MERGE_PREFIX = "Merge"

TYPE_TO_SECTION: Dict[str, SectionKind] = {
    "feat": SectionKind.FEATURES,
    "fix": SectionKind.BUG_FIXES,
    "docs": SectionKind.DOCUMENTATION,
    "style": SectionKind.STYLES,
    "refactor": SectionKind.CODE_REFACTORING,
    "perf": SectionKind.PERFORMANCE,
    "test": SectionKind.TESTS,
    "revert": SectionKind.REVERTS,
}

# type or type(scope)
_HEADER_RE = re.compile(r"^(?P<type>\w+)(?:\((?P<scope>[^()]*)\))?$")


def _as_record(raw: Union[RawCommitRecord, str]) -> RawCommitRecord:
    if isinstance(raw, RawCommitRecord):
        return raw
    return RawCommitRecord.parse(raw)


def classify(
    raw: Union[RawCommitRecord, str],
    ignore_scopes: Iterable[str] = (),
) -> List[ClassifiedCommit]:
    """Classify a single commit record.

    Parameters
    ----------
    raw : RawCommitRecord or str
        The record, or its pipe-delimited line form.
    ignore_scopes : Iterable[str]
        Scopes whose commits are left out of the changelog.

    Returns
    -------
    List[ClassifiedCommit]
        Empty for a skipped record, one entry for the commit's own section
        and a second ``BREAKING_CHANGES`` entry when the body carries a
        ``BREAKING CHANGE:`` marker.
    """
    record = _as_record(raw)
    subject = record.subject

    if subject.startswith(MERGE_PREFIX):
        logger.debug("Skipping merge commit %s: %s", record.short_hash, subject)
        return []

    kind = SectionKind.OTHER
    scope = None
    header, sep, description = subject.partition(":")
    match = _HEADER_RE.match(header) if sep else None
    if match and match.group("type") in TYPE_TO_SECTION:
        kind = TYPE_TO_SECTION[match.group("type")]
        scope = match.group("scope")
        subject = description.strip()

    if scope is not None and scope in set(ignore_scopes):
        logger.debug("Skipping commit %s with ignored scope '%s'", record.short_hash, scope)
        return []

    breaking_subject = None
    marker_at = record.body.find(BREAKING_CHANGE_MARKER)
    if marker_at != -1:
        footer = record.body[marker_at + len(BREAKING_CHANGE_MARKER):]
        # the footer ends at its line; trailers such as Signed-off-by follow it
        breaking_subject = footer.split("\n", 1)[0].strip()

    date = format_timestamp(record.timestamp)
    commit = Commit(
        type=kind,
        subject=subject,
        long_hash=record.long_hash,
        short_hash=record.short_hash,
        author=record.author,
        date=date,
        scope=scope,
        is_breaking=breaking_subject is not None,
        breaking_subject=breaking_subject,
    )
    result = [ClassifiedCommit(commit, kind)]

    if breaking_subject is not None:
        breaking = Commit(
            type=kind,
            subject=breaking_subject,
            long_hash=record.long_hash,
            short_hash=record.short_hash,
            author=record.author,
            date=date,
            is_breaking=True,
            breaking_subject=breaking_subject,
        )
        result.append(ClassifiedCommit(breaking, SectionKind.BREAKING_CHANGES))
    return result


def classify_all(
    records: Iterable[Union[RawCommitRecord, str]],
    ignore_scopes: Iterable[str] = (),
) -> List[ClassifiedCommit]:
    """Classify every record, keeping input order."""
    ignored = frozenset(ignore_scopes)
    classified: List[ClassifiedCommit] = []
    count = 0
    for raw in records:
        count += 1
        classified.extend(classify(raw, ignored))
    logger.debug("Classified %d record(s) into %d entries", count, len(classified))
    return classified
