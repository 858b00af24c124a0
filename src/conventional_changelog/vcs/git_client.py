"""
Git commit source for conventional_changelog.

This module wraps the few Git operations the changelog generator needs:
locating the repository, finding the latest release tag and reading the
commit log as raw records. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from conventional_changelog.grouping.commit_model import RawCommitRecord


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ASCII unit and record separators; subjects may contain "|" and bodies
# span several lines
FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"
LOG_FORMAT = "%x1f".join(["%s", "%b", "%H", "%h", "%an", "%at"]) + "%x1e"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading commit history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` directory is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError(f"Git executable not found: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    def get_last_tag(self) -> Optional[str]:
        """Return the most recent tag reachable from HEAD, or None if untagged."""
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        tag = result.stdout.strip()
        if result.returncode != 0 or not tag:
            logger.debug("No tag found: %s", result.stderr.strip())
            return None
        return tag

    def get_tag_hash(self, tag: str) -> str:
        """Return the full hash of the commit ``tag`` points to.

        Raises
        ------
        GitError
            If the tag cannot be resolved.
        """
        result = self._run(["rev-list", "-n", "1", tag], check=True)
        return result.stdout.strip()

    # ------------------------------------------------------------------
    # Commit log
    # ------------------------------------------------------------------
    def get_commits(self, from_ref: Optional[str] = None, to_ref: str = "HEAD") -> List[RawCommitRecord]:
        """Read the commits in ``from_ref..to_ref`` as raw records.

        Parameters
        ----------
        from_ref : str, optional
            Exclusive start of the range. ``None`` reads the whole history
            up to ``to_ref``.
        to_ref : str
            Inclusive end of the range.

        Returns
        -------
        List[RawCommitRecord]
            Records in ``git log`` order, newest first.

        Raises
        ------
        GitError
            If the log command fails.
        """
        rev_range = f"{from_ref}..{to_ref}" if from_ref else to_ref
        result = self._run(["log", rev_range, f"--pretty=format:{LOG_FORMAT}"], check=True)

        records = []
        for chunk in result.stdout.split(RECORD_SEPARATOR):
            chunk = chunk.strip("\n")
            if not chunk:
                continue
            records.append(RawCommitRecord.parse(chunk, FIELD_SEPARATOR))
        logger.debug("Read %d commit(s) for range %s", len(records), rev_range)
        return records
