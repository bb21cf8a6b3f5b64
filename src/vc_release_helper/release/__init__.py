"""
Release file handling for vc_release_helper.

Reads and bumps the version in ``package.json`` and rewrites the files
that carry it. See :mod:`vc_release_helper.release.updater`.
"""

from .updater import (  # noqa: F401
    ChangelogResult,
    ChangelogStatus,
    update_changelog,
    update_index_file,
    update_package_json,
)
from .version import ReleaseError, bump_version, get_current_version  # noqa: F401
