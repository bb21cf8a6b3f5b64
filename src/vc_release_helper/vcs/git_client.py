"""
Git client implementation for vc_release_helper.

This module wraps the Git commands required by the release assistant:
reading the last commit, listing commits since the latest tag, reading
staged diff statistics, committing, and the tag/push publish sequence.
All subprocess calls go through :meth:`GitClient._run` so that unit
tests can mock them easily.

Query helpers built on :meth:`GitClient.run` never raise; a failing
command simply produces an empty result. Commands that change the
repository raise :class:`GitError` instead.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from vc_release_helper.analysis.commit_generator import FileChangeRecord, FileStatus


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


LOG_FORMAT = "--pretty=format:%H|%s"

_STATUS_LETTERS = {
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
}


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
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
            If the command exits with a non-zero status when ``check`` is
            True, or if ``git`` cannot be executed at all.
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
        except OSError as exc:
            logger.error("Unable to execute git: %s", exc)
            raise GitError(f"Unable to execute git: {exc}") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def run(self, args: List[str]) -> str:
        """Run a read-only Git command and return its trimmed stdout.

        Any failure (non-zero exit, missing repository, missing git
        binary) yields an empty string.
        """
        try:
            return self._run(args, check=True).stdout.strip()
        except GitError as exc:
            logger.debug("Ignoring failed git query %s: %s", args, exc)
            return ""

    @staticmethod
    def _lines(output: str) -> List[str]:
        return [line for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def has_commits(self) -> bool:
        return bool(self.run(["rev-parse", "HEAD"]))

    def last_commit_message(self) -> str:
        return self.run(["log", "-1", "--pretty=%B"])

    def files_changed_in_last_commit(self) -> List[str]:
        return self._lines(self.run(["diff-tree", "--no-commit-id", "--name-only", "-r", "HEAD"]))

    def files_added_in_last_commit(self) -> List[str]:
        return self._lines(
            self.run(["diff-tree", "--no-commit-id", "--diff-filter=A", "--name-only", "-r", "HEAD"])
        )

    def latest_tag(self) -> str:
        """Return the most recent tag reachable from HEAD, or ``""``."""
        return self.run(["describe", "--tags", "--abbrev=0"])

    def log_since(self, tag: Optional[str] = None) -> str:
        """Return ``%H|%s`` log lines since ``tag`` (or the full history)."""
        if tag:
            return self.run(["log", f"{tag}..HEAD", LOG_FORMAT])
        return self.run(["log", LOG_FORMAT])

    # ------------------------------------------------------------------
    # Staged changes
    # ------------------------------------------------------------------
    def staged_paths(self) -> List[str]:
        return self._lines(self.run(["diff", "--cached", "--name-only"]))

    def _staged_status(self, path: str) -> FileStatus:
        output = self.run(["diff", "--cached", "--name-status", "--", path])
        return _STATUS_LETTERS.get(output[:1], FileStatus.MODIFIED)

    def staged_changes(self) -> List[FileChangeRecord]:
        """Return a summary of every staged, non-binary file.

        Binary files are reported by ``--numstat`` with ``-`` counts and
        are skipped.
        """
        output = self.run(["diff", "--cached", "--numstat"])
        changes: List[FileChangeRecord] = []
        for line in self._lines(output):
            parts = line.split("\t", 2)
            if len(parts) != 3:
                logger.debug("Skipping unexpected numstat line: %r", line)
                continue
            additions, deletions, path = parts
            if additions == "-" or deletions == "-":
                logger.debug("Skipping binary file: %s", path)
                continue
            try:
                added_lines, deleted_lines = int(additions), int(deletions)
            except ValueError:
                logger.debug("Skipping numstat line with invalid counts: %r", line)
                continue
            changes.append(
                FileChangeRecord(
                    path=path,
                    status=self._staged_status(path),
                    additions=added_lines,
                    deletions=deleted_lines,
                )
            )
        return changes

    # ------------------------------------------------------------------
    # Committing and publishing
    # ------------------------------------------------------------------
    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        Multi-line commit messages are supported. If the commit fails,
        a GitError is raised.
        """
        self._run(["commit", "-m", message], check=True)

    def publish_release(
        self,
        version: str,
        on_step: Optional[Callable[[List[str]], None]] = None,
    ) -> None:
        """Stage everything, commit the bump, tag ``v{version}`` and push.

        Parameters
        ----------
        version : str
            The version being released.
        on_step : callable, optional
            Called with the git arguments of each step once it succeeded.

        Raises
        ------
        GitError
            On the first step that fails; later steps are not attempted.
        """
        for args in release_steps(version):
            logger.debug("Release step: git %s", " ".join(args))
            self._run(args, check=True)
            if on_step is not None:
                on_step(args)


def bump_commit_message(version: str) -> str:
    return f"chore: bump version to {version}"


def release_steps(version: str) -> List[List[str]]:
    """Return the git argument lists run by :meth:`GitClient.publish_release`."""
    return [
        ["add", "-A"],
        ["commit", "-m", bump_commit_message(version)],
        ["tag", f"v{version}"],
        ["push"],
        ["push", "--tags"],
    ]
