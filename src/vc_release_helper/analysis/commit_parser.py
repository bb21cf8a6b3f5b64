"""
Parsing of commit subject lines into structured records.

Messages written in Conventional Commit form (``type(scope)!: text``)
are split into their parts. Anything else falls back to a prefix
keyword table so that free-form messages such as ``"Add login page"``
still end up with a sensible kind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Tuple, Union


CONVENTIONAL_RE = re.compile(r"^(\w+)(\(([^)]+)\))?(!)?:\s*(.+)$")


class CommitKind(str, Enum):
    """Kinds assigned by the keyword fallback."""

    FEAT = "feat"
    FIX = "fix"
    REMOVED = "removed"
    DEPRECATED = "deprecated"
    REFACTOR = "refactor"
    DOCS = "docs"
    STYLE = "style"
    TEST = "test"
    CHORE = "chore"
    BUILD = "build"
    CI = "ci"
    SECURITY = "security"
    OTHER = "other"


# Evaluated top to bottom against the lowercased message; first hit wins.
FALLBACK_RULES: List[Tuple[Pattern[str], CommitKind]] = [
    (re.compile(r"^(add|feat|feature|nova|novo|implement|criar|new|create)"), CommitKind.FEAT),
    (re.compile(r"^(fix|corrig|bug|erro|ajust)"), CommitKind.FIX),
    (re.compile(r"^(remove|remov|delete|delet)"), CommitKind.REMOVED),
    (re.compile(r"^(deprecat|obsolet)"), CommitKind.DEPRECATED),
    (re.compile(r"^(refactor|reescrev|rewrite)"), CommitKind.REFACTOR),
    (re.compile(r"^(docs|doc|documentation)"), CommitKind.DOCS),
    (re.compile(r"^(style|format)"), CommitKind.STYLE),
    (re.compile(r"^(test|tests)"), CommitKind.TEST),
    (re.compile(r"^(chore|build|ci)"), CommitKind.CHORE),
    (re.compile(r"^(security|segurança|sec)"), CommitKind.SECURITY),
]


@dataclass(frozen=True)
class CommitRecord:
    """A single commit as used by the changelog aggregator.

    Attributes
    ----------
    hash : str
        Abbreviated (7 character) commit hash.
    message : str
        Raw subject line.
    kind : str
        Lowercased type token for conventional commits, otherwise one of
        the :class:`CommitKind` values.
    scope : Optional[str]
        Scope from ``type(scope): ...``; ``None`` when absent.
    description : str
        Human readable part of the message.
    breaking : bool
        Whether the commit announces a breaking change.
    """

    hash: str
    message: str
    kind: str
    description: str
    breaking: bool = False
    scope: Optional[str] = None


@dataclass(frozen=True)
class ConventionalForm:
    kind: str
    scope: Optional[str]
    breaking: bool
    description: str


@dataclass(frozen=True)
class FallbackForm:
    kind: str
    description: str
    breaking: bool


ParsedForm = Union[ConventionalForm, FallbackForm]


def infer_kind(message: str) -> CommitKind:
    """Guess the kind of a free-form message from its leading keyword."""
    lowered = message.lower()
    for pattern, kind in FALLBACK_RULES:
        if pattern.match(lowered):
            return kind
    return CommitKind.OTHER


def _parse_form(message: str) -> ParsedForm:
    match = CONVENTIONAL_RE.match(message)
    if match:
        type_token, _, scope, bang, description = match.groups()
        return ConventionalForm(
            kind=type_token.lower(),
            scope=scope,
            breaking=bool(bang) or "breaking" in message.lower(),
            description=description,
        )

    lowered = message.lower()
    return FallbackForm(
        kind=infer_kind(message).value,
        description=message,
        breaking="breaking" in lowered or "break" in lowered,
    )


def parse_commit_message(commit_hash: str, message: str) -> CommitRecord:
    """Parse a commit subject line into a :class:`CommitRecord`.

    Never raises; every input yields a fully populated record.
    """
    form = _parse_form(message)
    scope = form.scope if isinstance(form, ConventionalForm) else None
    return CommitRecord(
        hash=commit_hash[:7],
        message=message,
        kind=form.kind,
        scope=scope,
        description=form.description,
        breaking=form.breaking,
    )


def parse_log_line(line: str) -> CommitRecord:
    """Parse one ``%H|%s`` line from ``git log``.

    Only the first ``|`` separates hash from subject, so subjects that
    contain the character are kept intact.
    """
    commit_hash, _, message = line.partition("|")
    return parse_commit_message(commit_hash.strip(), message)
