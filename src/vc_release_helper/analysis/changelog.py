"""
Changelog aggregation.

Collects the commits made since the most recent tag, files each one
under a Keep-a-Changelog style section, and renders the sections as
Markdown. Near-identical lines inside a section are collapsed using the
edit-distance based :func:`similarity` score.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from vc_release_helper.analysis.commit_parser import CommitRecord, parse_log_line
from vc_release_helper.analysis.similarity import similarity

if TYPE_CHECKING:
    from vc_release_helper.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Kinds that never reach the changelog unless flagged as breaking.
SKIPPED_KINDS = frozenset({"chore", "docs", "style", "test", "build", "ci"})

DUPLICATE_THRESHOLD = 0.8

BREAKING_PREFIX = "⚠️ **BREAKING CHANGE**: "

# (attribute, emoji, label) in rendering order.
SECTION_HEADINGS: List[Tuple[str, str, str]] = [
    ("breaking", "💥", "Breaking Changes"),
    ("added", "✨", "Added"),
    ("changed", "🔄", "Changed"),
    ("deprecated", "⚠️", "Deprecated"),
    ("removed", "🗑️", "Removed"),
    ("fixed", "🐛", "Fixed"),
    ("security", "🔒", "Security"),
    ("other", "📝", "Other"),
]

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class ChangelogSections:
    """Changelog entries grouped by section, in commit order."""

    breaking: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)
    changed: List[str] = field(default_factory=list)
    deprecated: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    fixed: List[str] = field(default_factory=list)
    security: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


def commits_since_last_tag(git: "GitClient") -> List[CommitRecord]:
    """Return the commits reachable from HEAD but not from the latest tag.

    When the repository has no tag yet the whole history is returned.
    Order follows ``git log`` (newest first).
    """
    last_tag = git.latest_tag()
    if last_tag:
        logger.debug("Collecting commits since tag %s", last_tag)
    else:
        logger.debug("No tag found; collecting the full history")
    output = git.log_since(last_tag or None)
    if not output:
        return []
    return [parse_log_line(line) for line in output.splitlines() if line.strip()]


def _section_for(commit: CommitRecord) -> str:
    kind = commit.kind
    if kind in ("feat", "feature"):
        return "added"
    if kind == "fix":
        return "fixed"
    if kind in ("removed", "remove"):
        return "removed"
    if kind == "deprecated":
        return "deprecated"
    if kind == "security":
        return "security"
    if kind in ("refactor", "perf"):
        return "changed"
    return "other"


def format_entry(commit: CommitRecord) -> str:
    """Return the changelog line (without the bullet) for ``commit``."""
    if commit.scope:
        return f"**{commit.scope}**: {commit.description}"
    return commit.description


def group_by_type(commits: Iterable[CommitRecord]) -> ChangelogSections:
    """File each commit under exactly one changelog section.

    Breaking commits only go to ``breaking``. Housekeeping kinds
    (chore, docs, style, test, build, ci) are dropped unless breaking.
    """
    sections = ChangelogSections()
    for commit in commits:
        if commit.breaking:
            sections.breaking.append(BREAKING_PREFIX + format_entry(commit))
            continue
        if commit.kind in SKIPPED_KINDS:
            continue
        getattr(sections, _section_for(commit)).append(format_entry(commit))
    return sections


def normalize_entry(entry: str) -> str:
    text = _NON_ALNUM_RE.sub("", entry.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_duplicates(entries: Sequence[str]) -> List[str]:
    """Drop entries that are near-identical to an earlier one.

    The first spelling of a line is kept verbatim; later lines whose
    normalized form scores above ``DUPLICATE_THRESHOLD`` against any kept
    line are discarded.
    """
    kept: List[str] = []
    kept_normalized: List[str] = []
    for entry in entries:
        normalized = normalize_entry(entry)
        if any(similarity(normalized, other) > DUPLICATE_THRESHOLD for other in kept_normalized):
            logger.debug("Dropping duplicate changelog entry: %s", entry)
            continue
        kept.append(entry)
        kept_normalized.append(normalized)
    return kept


def render_sections(sections: ChangelogSections) -> str:
    """Render non-empty sections as Markdown.

    Each section becomes a ``### <emoji> <Label>`` header followed by
    ``- <entry>`` lines; sections are separated by a blank line.
    """
    blocks: List[str] = []
    for attr, emoji, label in SECTION_HEADINGS:
        entries = remove_duplicates(getattr(sections, attr))
        if not entries:
            continue
        lines = [f"### {emoji} {label}", ""]
        lines.extend(f"- {entry}" for entry in entries)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
