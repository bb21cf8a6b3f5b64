"""
Conventional Commit message suggestions for staged changes.

:func:`generate_commit_message` looks only at file paths, their status
and line counts; it never reads file contents. Paths are bucketed into
tests, docs, config, style and code, and a decision cascade picks the
commit type, an optional scope and a short description.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class FileChangeRecord:
    """Diff summary of one staged, non-binary file."""

    path: str
    status: FileStatus
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class CommitSuggestion:
    kind: str
    description: str
    scope: Optional[str] = None

    @property
    def full_message(self) -> str:
        if self.scope:
            return f"{self.kind}({self.scope}): {self.description}"
        return f"{self.kind}: {self.description}"


FALLBACK_SUGGESTION = CommitSuggestion(kind="chore", description="update project files")

COMMON_SCOPE_DIRS = ("src", "lib", "api", "ui", "components", "utils", "services")
IGNORED_SCOPE_DIRS = frozenset({"src", "dist", "node_modules"})

EXTENSION_LABELS = {
    "ts": "TypeScript",
    "js": "JavaScript",
    "tsx": "React",
    "jsx": "React",
    "py": "Python",
    "md": "documentation",
}

_DOCS_RE = re.compile(r"\.(md|txt|rst)$")
_CONFIG_RE = re.compile(r"\.(json|yaml|yml|toml|ini|env|config)$")
_STYLE_RE = re.compile(r"\.(css|scss|sass|less)$")
_CODE_RE = re.compile(r"\.(ts|js|tsx|jsx|py|java|go|rs|c|cpp|h)$")

STYLE_MAX_LINES = 50
LARGE_REFACTOR_LINES = 200
FIX_DELETION_RATIO = 0.7


def categorize_path(path: str) -> Optional[str]:
    """Return the bucket for ``path`` or ``None`` when no rule applies."""
    lowered = path.lower()
    if "test" in lowered or "spec" in lowered:
        return "tests"
    if _DOCS_RE.search(lowered):
        return "docs"
    if _CONFIG_RE.search(lowered) or "package.json" in lowered or "tsconfig" in lowered:
        return "config"
    if _STYLE_RE.search(lowered):
        return "style"
    if _CODE_RE.search(lowered):
        return "code"
    return None


def count_file_types(changes: Sequence[FileChangeRecord]) -> Dict[str, int]:
    counts = {"code": 0, "tests": 0, "docs": 0, "config": 0, "style": 0}
    for change in changes:
        bucket = categorize_path(change.path)
        if bucket is not None:
            counts[bucket] += 1
    return counts


def detect_scope(changes: Sequence[FileChangeRecord]) -> Optional[str]:
    """Infer a commit scope from the directories the changes live in."""
    paths = [change.path for change in changes]

    for directory in COMMON_SCOPE_DIRS:
        if any(path.startswith(f"{directory}/") for path in paths):
            return directory

    segments = [path.split("/")[0] for path in paths]
    segments = [segment for segment in segments if segment not in IGNORED_SCOPE_DIRS]
    if segments and segments[0] and all(segment == segments[0] for segment in segments):
        return segments[0]
    return None


def file_stem(path: str) -> str:
    """Return the file name of ``path`` without its last extension."""
    name = path.split("/")[-1]
    return re.sub(r"\.[^.]+$", "", name)


def most_common_file_type(changes: Sequence[FileChangeRecord]) -> str:
    """Return a display label for the most frequent extension.

    A path without a dot counts as its own extension, so ``Makefile``
    yields ``"Makefile"``. Ties go to the extension seen first.
    """
    counts: Dict[str, int] = {}
    for change in changes:
        extension = change.path.split(".")[-1]
        if extension:
            counts[extension] = counts.get(extension, 0) + 1
    if not counts:
        return "files"
    # max() keeps the first maximal key and dicts preserve insertion order
    winner = max(counts, key=lambda ext: counts[ext])
    return EXTENSION_LABELS.get(winner, winner)


def generate_commit_message(changes: Sequence[FileChangeRecord]) -> CommitSuggestion:
    """Suggest a Conventional Commit message for ``changes``.

    Parameters
    ----------
    changes : Sequence[FileChangeRecord]
        Staged file summaries; binary files are expected to be excluded.

    Returns
    -------
    CommitSuggestion
        Never raises; an empty input yields ``chore: update project files``.
    """
    if not changes:
        return FALLBACK_SUGGESTION

    file_types = count_file_types(changes)
    total_additions = sum(change.additions for change in changes)
    total_deletions = sum(change.deletions for change in changes)
    total_lines = total_additions + total_deletions

    added = [c for c in changes if c.status == FileStatus.ADDED]
    deleted = [c for c in changes if c.status == FileStatus.DELETED]
    modified = [c for c in changes if c.status == FileStatus.MODIFIED]

    if file_types["docs"] > 0 and file_types["code"] == 0:
        if len(changes) == 1:
            return CommitSuggestion("docs", f"update {file_stem(changes[0].path)}")
        return CommitSuggestion("docs", "update documentation")

    if file_types["tests"] > 0 and file_types["code"] == 0:
        description = "add test" if file_types["tests"] == 1 else "update tests"
        return CommitSuggestion("test", description)

    if file_types["config"] > 0 and file_types["code"] == 0:
        return CommitSuggestion("chore", "update configuration")

    if total_lines < STYLE_MAX_LINES and file_types["style"] > 0:
        return CommitSuggestion("style", "format code")

    if added and len(added) > len(deleted):
        if len(added) == 1:
            description = f"add {file_stem(added[0].path)}"
        else:
            description = f"add {most_common_file_type(added)} functionality"
        return CommitSuggestion("feat", description, detect_scope(added))

    if len(deleted) > len(added):
        if len(deleted) == 1:
            return CommitSuggestion("refactor", f"remove {file_stem(deleted[0].path)}")
        return CommitSuggestion("refactor", "remove unused code")

    # More deletions than additions usually means something was being fixed.
    if total_deletions > total_additions * FIX_DELETION_RATIO:
        if len(changes) == 1:
            description = f"resolve issue in {file_stem(changes[0].path)}"
        else:
            description = "resolve issues"
        return CommitSuggestion("fix", description, detect_scope(changes))

    if modified:
        if len(modified) == 1:
            description = f"update {file_stem(modified[0].path)}"
        elif total_lines > LARGE_REFACTOR_LINES:
            description = "major code refactoring"
        else:
            description = "improve code structure"
        return CommitSuggestion("refactor", description, detect_scope(modified))

    # Renames only: reuse the empty-input suggestion instead of an empty description.
    return FALLBACK_SUGGESTION
