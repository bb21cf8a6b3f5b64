"""
Heuristics for suggesting a semantic version bump from the last commit.

The classifier looks at the commit message and the list of changed
files and returns a :class:`ChangeAnalysis` holding the suggested bump
level plus the reasons that led to it. Keywords are matched as plain
substrings of the lowercased message (``"remov"`` also fires inside
unrelated words). This is intentionally simple and deterministic so
that it can be unit tested without a repository.

Reasons are returned as :class:`ReasonCode` values; turning them into
text is the job of :func:`vc_release_helper.i18n.describe_reason`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from vc_release_helper.vcs.git_client import GitClient


class BumpLevel(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class ReasonCode(str, Enum):
    BREAKING_CHANGE = "breaking_change"
    CONFIG_MODIFIED = "config_modified"
    NEW_FEATURE = "new_feature"
    NEW_FILES = "new_files"
    BUG_FIX = "bug_fix"
    SMALL_CHANGE = "small_change"


MAJOR_KEYWORDS = (
    "breaking",
    "break",
    "incompatível",
    "incompatible",
    "remove",
    "remov",
    "delete",
    "delet",
    "refactor completo",
    "reescrita",
    "rewrite",
)

MINOR_KEYWORDS = (
    "add",
    "adicion",
    "nova",
    "novo",
    "new",
    "feature",
    "implement",
    "criar",
    "create",
    "funcionalidade",
)

PATCH_KEYWORDS = (
    "fix",
    "corrig",
    "bug",
    "erro",
    "error",
    "ajust",
    "ajeit",
    "pequen",
    "minor change",
)

# Entry points and manifests whose modification may signal a structural change.
CRITICAL_FILES = (
    "index.js",
    "index.ts",
    "package.json",
    "projects.config.js",
    "tasks.config.js",
)

CONFIG_FILE_MARKERS = ("config.js", "config.ts")


@dataclass(frozen=True)
class Reason:
    """One justification for the suggested bump.

    ``count`` is only set for :attr:`ReasonCode.NEW_FILES`.
    """

    code: ReasonCode
    count: Optional[int] = None


@dataclass
class ChangeAnalysis:
    """Result of :func:`analyze`."""

    commit_message: str
    files_changed: List[str] = field(default_factory=list)
    bump_level: BumpLevel = BumpLevel.PATCH
    reasons: List[Reason] = field(default_factory=list)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def analyze(
    commit_message: str,
    changed_files: Sequence[str],
    newly_added_files: Sequence[str] = (),
) -> ChangeAnalysis:
    """Suggest a bump level for a commit.

    Parameters
    ----------
    commit_message : str
        Full message of the commit being released.
    changed_files : Sequence[str]
        Paths touched by the commit.
    newly_added_files : Sequence[str]
        Subset of paths that the commit created.

    Returns
    -------
    ChangeAnalysis
        The suggested level (``patch`` by default) and at least one reason.

    Notes
    -----
    Rules run in a fixed order and can only raise the level. Once a rule
    has set ``major`` nothing later lowers it.
    """
    analysis = ChangeAnalysis(commit_message=commit_message, files_changed=list(changed_files))
    message = commit_message.lower()

    if _contains_any(message, MAJOR_KEYWORDS):
        analysis.bump_level = BumpLevel.MAJOR
        analysis.reasons.append(Reason(ReasonCode.BREAKING_CHANGE))

    has_critical = any(
        critical in path for path in changed_files for critical in CRITICAL_FILES
    )
    if has_critical and analysis.bump_level != BumpLevel.MAJOR:
        if any(marker in path for path in changed_files for marker in CONFIG_FILE_MARKERS):
            analysis.bump_level = BumpLevel.MINOR
            analysis.reasons.append(Reason(ReasonCode.CONFIG_MODIFIED))

    if _contains_any(message, MINOR_KEYWORDS) and analysis.bump_level == BumpLevel.PATCH:
        analysis.bump_level = BumpLevel.MINOR
        analysis.reasons.append(Reason(ReasonCode.NEW_FEATURE))

    if newly_added_files and analysis.bump_level == BumpLevel.PATCH:
        analysis.bump_level = BumpLevel.MINOR
        analysis.reasons.append(Reason(ReasonCode.NEW_FILES, count=len(newly_added_files)))

    if _contains_any(message, PATCH_KEYWORDS) and analysis.bump_level == BumpLevel.PATCH:
        analysis.reasons.append(Reason(ReasonCode.BUG_FIX))

    if not analysis.reasons and analysis.bump_level == BumpLevel.PATCH:
        analysis.reasons.append(Reason(ReasonCode.SMALL_CHANGE))

    return analysis


def analyze_last_commit(git: "GitClient") -> ChangeAnalysis:
    """Run :func:`analyze` against HEAD of the repository behind ``git``."""
    return analyze(
        git.last_commit_message(),
        git.files_changed_in_last_commit(),
        git.files_added_in_last_commit(),
    )
