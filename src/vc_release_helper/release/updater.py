"""
Rewriting project files for a new release.

Three files are touched: ``package.json`` (the ``version`` field), the
first index file carrying an ``@version X.Y.Z`` tag, and
``CHANGELOG.md``, which receives a new section built from the commits
since the last tag. A missing changelog or an empty commit range is
reported through :class:`ChangelogResult` rather than raised.
"""

from __future__ import annotations

import datetime
import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from vc_release_helper.analysis.changelog import commits_since_last_tag, group_by_type, render_sections
from vc_release_helper.i18n import DEFAULT_LANGUAGE, Language, translate
from vc_release_helper.release.version import PACKAGE_FILENAME, ReleaseError, read_package_json

if TYPE_CHECKING:
    from vc_release_helper.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CHANGELOG_FILENAME = "CHANGELOG.md"

INDEX_CANDIDATES = ("index.js", "index.ts", "src/index.js", "src/index.ts")

INITIAL_RELEASE_VERSION = "1.0.0"

_VERSION_TAG_RE = re.compile(r"@version \d+\.\d+\.\d+")


class ChangelogStatus(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    NO_COMMITS = "no_commits"


@dataclass(frozen=True)
class ChangelogResult:
    status: ChangelogStatus
    commit_count: int = 0


def update_package_json(new_version: str, project_root: Path) -> None:
    """Set the ``version`` field of ``package.json`` to ``new_version``.

    Key order is preserved; the file is written with two-space
    indentation and a trailing newline.
    """
    data = read_package_json(project_root)
    data["version"] = new_version
    package_path = project_root / PACKAGE_FILENAME
    try:
        package_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write %s: %s", package_path, exc)
        raise ReleaseError(f"Unable to write {package_path}: {exc}") from exc
    logger.info("Updated %s to %s", package_path, new_version)


def update_index_file(new_version: str, project_root: Path) -> Optional[Path]:
    """Rewrite the ``@version`` tag of the first index file that has one.

    Returns
    -------
    Optional[Path]
        The updated file, or ``None`` when no candidate carries a tag.
    """
    for candidate in INDEX_CANDIDATES:
        index_path = project_root / candidate
        if not index_path.exists():
            continue
        content = index_path.read_text(encoding="utf-8")
        if "@version" not in content:
            continue
        updated = _VERSION_TAG_RE.sub(f"@version {new_version}", content, count=1)
        index_path.write_text(updated, encoding="utf-8")
        logger.info("Updated @version in %s", index_path)
        return index_path
    logger.debug("No index file with an @version tag under %s", project_root)
    return None


def build_changelog_entry(
    version: str,
    sections_markdown: str,
    release_date: datetime.date,
    language: Language = DEFAULT_LANGUAGE,
) -> str:
    """Return the Markdown block for one release."""
    lines: List[str] = [f"## [{version}] - {release_date.isoformat()}", ""]
    if version == INITIAL_RELEASE_VERSION:
        lines.extend(
            [
                f"### 🎉 {translate('initial_release', language)}",
                "",
                translate("first_public_version", language),
                "",
            ]
        )
    if sections_markdown:
        lines.append(sections_markdown)
    return "\n".join(lines).rstrip("\n") + "\n"


def insert_changelog_entry(content: str, entry: str) -> str:
    """Insert ``entry`` before the first ``## [`` heading of ``content``.

    When there is no previous release heading the entry is appended.
    """
    lines = content.split("\n")
    for index, line in enumerate(lines):
        if line.startswith("## ["):
            head = "\n".join(lines[:index])
            tail = "\n".join(lines[index:])
            return (head + "\n" if index else "") + entry + "\n" + tail
    separator = "" if content.endswith("\n\n") else ("\n" if content.endswith("\n") else "\n\n")
    return content + separator + entry


def update_changelog(
    version: str,
    git: "GitClient",
    project_root: Path,
    language: Language = DEFAULT_LANGUAGE,
    today: Optional[datetime.date] = None,
) -> ChangelogResult:
    """Add a section for ``version`` to ``CHANGELOG.md``.

    Parameters
    ----------
    version : str
        The version being released.
    git : GitClient
        Source of the commits since the last tag.
    project_root : Path
        Directory holding ``CHANGELOG.md``.
    language : Language
        Language of the initial-release note.
    today : datetime.date, optional
        Release date; defaults to the current date.

    Returns
    -------
    ChangelogResult
        ``NOT_FOUND`` and ``NO_COMMITS`` leave the file untouched.
    """
    changelog_path = project_root / CHANGELOG_FILENAME
    if not changelog_path.exists():
        logger.info("%s not found; skipping changelog update", changelog_path)
        return ChangelogResult(ChangelogStatus.NOT_FOUND)

    commits = commits_since_last_tag(git)
    if not commits:
        logger.info("No new commits since the last tag; changelog unchanged")
        return ChangelogResult(ChangelogStatus.NO_COMMITS)

    sections = group_by_type(commits)
    if sections.is_empty():
        logger.info("Only housekeeping commits since the last tag; changelog unchanged")
        return ChangelogResult(ChangelogStatus.NO_COMMITS)

    entry = build_changelog_entry(
        version,
        render_sections(sections),
        today or datetime.date.today(),
        language,
    )
    content = changelog_path.read_text(encoding="utf-8")
    changelog_path.write_text(insert_changelog_entry(content, entry), encoding="utf-8")
    logger.info("Added %d commit(s) to %s", len(commits), changelog_path)
    return ChangelogResult(ChangelogStatus.UPDATED, commit_count=len(commits))
