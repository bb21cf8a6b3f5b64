"""
Pure analysis logic for vc_release_helper.

This package holds the commit parser, changelog aggregation, the
version bump classifier and the commit message generator. Nothing in
here performs I/O; callers pass in data already fetched from git. See
:mod:`vc_release_helper.analysis.change_classifier` and
:mod:`vc_release_helper.analysis.commit_generator` for details.
"""

from .change_classifier import BumpLevel, ChangeAnalysis, Reason, ReasonCode, analyze  # noqa: F401
from .changelog import ChangelogSections, group_by_type, remove_duplicates  # noqa: F401
from .commit_generator import (  # noqa: F401
    CommitSuggestion,
    FileChangeRecord,
    FileStatus,
    generate_commit_message,
)
from .commit_parser import CommitKind, CommitRecord, parse_commit_message  # noqa: F401
from .similarity import edit_distance, similarity  # noqa: F401
