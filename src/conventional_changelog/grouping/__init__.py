"""
Commit classification and data models.

This package turns raw commit records into commits tagged with their
changelog section. See :mod:`conventional_changelog.grouping.commit_classifier`
and :mod:`conventional_changelog.grouping.commit_model` for details.
"""

from .commit_classifier import classify, classify_all  # noqa: F401
from .commit_model import ClassifiedCommit, Commit, RawCommitRecord, SectionKind  # noqa: F401
