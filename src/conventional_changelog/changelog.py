"""
One-call changelog generation.

Combines the classifier and the renderer: the CLI hands over the raw records
obtained from the commit source and receives the finished text.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, Optional, Union

from conventional_changelog.grouping.commit_classifier import classify_all
from conventional_changelog.grouping.commit_model import RawCommitRecord
from conventional_changelog.rendering.renderer import RenderOptions, render


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def generate_changelog(
    records: Iterable[Union[RawCommitRecord, str]],
    version: str,
    options: Optional[RenderOptions] = None,
    today: Optional[Callable[[], date]] = None,
    ignore_scopes: Iterable[str] = (),
) -> str:
    """Classify ``records`` and render them as the changelog for ``version``."""
    classified = classify_all(records, ignore_scopes)
    logger.debug("Rendering %d changelog entries for version %s", len(classified), version)
    return render(classified, version, options, today)
