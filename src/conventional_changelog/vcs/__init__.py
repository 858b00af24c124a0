"""
Version control system (VCS) integration.

Provides the Git client used as the changelog's commit source: it locates
the repository, resolves the latest release tag and reads the commit log.
"""

from .git_client import GitClient, GitError  # noqa: F401
