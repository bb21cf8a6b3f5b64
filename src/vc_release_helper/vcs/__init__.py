"""
Version control system (VCS) integration.

This package contains the Git client used to read commit history and
staged changes and to run the commit/tag/push publish sequence.
"""

from .git_client import GitClient, GitError  # noqa: F401
