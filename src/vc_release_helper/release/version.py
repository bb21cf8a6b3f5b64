"""
Reading and bumping the project version stored in ``package.json``.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

from vc_release_helper.analysis.change_classifier import BumpLevel


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PACKAGE_FILENAME = "package.json"

_SEMVER_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


class ReleaseError(Exception):
    """Raised when project files cannot be read or hold an invalid version."""

    pass


def read_package_json(project_root: Path) -> Dict[str, Any]:
    package_path = project_root / PACKAGE_FILENAME
    try:
        data = json.loads(package_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read %s: %s", package_path, exc)
        raise ReleaseError(f"Unable to read {package_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ReleaseError(f"{package_path} must contain a JSON object")
    return data


def get_current_version(project_root: Path) -> str:
    """Return the ``version`` field of ``package.json`` in ``project_root``.

    Raises
    ------
    ReleaseError
        If the file is missing, is not valid JSON, or has no string
        ``version``.
    """
    version = read_package_json(project_root).get("version")
    if not isinstance(version, str):
        raise ReleaseError(f"No version field in {project_root / PACKAGE_FILENAME}")
    return version


def bump_version(current_version: str, level: Union[BumpLevel, str]) -> str:
    """Increment ``current_version`` according to ``level``.

    >>> bump_version("1.2.3", BumpLevel.MINOR)
    '1.3.0'

    Raises
    ------
    ReleaseError
        If ``current_version`` is not of the form ``X.Y.Z``.
    """
    match = _SEMVER_RE.match(current_version.strip())
    if not match:
        raise ReleaseError(f"Invalid version '{current_version}', expected X.Y.Z")
    major, minor, patch = (int(part) for part in match.groups())

    level = BumpLevel(level)
    if level == BumpLevel.MAJOR:
        return f"{major + 1}.0.0"
    if level == BumpLevel.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"
