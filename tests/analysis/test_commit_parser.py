import unittest

import pytest

from vc_release_helper.analysis.commit_parser import (
    CommitKind,
    CommitRecord,
    infer_kind,
    parse_commit_message,
    parse_log_line,
)


class TestConventionalCommits(unittest.TestCase):
    def test_type_scope_description(self) -> None:
        record = parse_commit_message("abcdef1234567", "feat(api): add endpoint")
        self.assertEqual(record.kind, "feat")
        self.assertEqual(record.scope, "api")
        self.assertEqual(record.description, "add endpoint")
        self.assertFalse(record.breaking)
        self.assertEqual(record.hash, "abcdef1")
        self.assertEqual(record.message, "feat(api): add endpoint")

    def test_bang_marks_breaking(self) -> None:
        record = parse_commit_message("abc", "feat!: breaking change")
        self.assertTrue(record.breaking)
        self.assertEqual(record.kind, "feat")
        self.assertIsNone(record.scope)

    def test_bang_with_scope(self) -> None:
        record = parse_commit_message("abc", "refactor(core)!: drop legacy loader")
        self.assertTrue(record.breaking)
        self.assertEqual(record.scope, "core")

    def test_breaking_word_marks_breaking(self) -> None:
        record = parse_commit_message("abc", "fix: Breaking behaviour of parser")
        self.assertTrue(record.breaking)

    def test_type_is_lowercased_but_not_mapped(self) -> None:
        record = parse_commit_message("abc", "Feature: dark mode")
        self.assertEqual(record.kind, "feature")

    def test_unknown_type_passes_through(self) -> None:
        record = parse_commit_message("abc", "perf: faster startup")
        self.assertEqual(record.kind, "perf")
        self.assertEqual(record.description, "faster startup")


class TestFallbackParsing(unittest.TestCase):
    def test_keyword_prefixes(self) -> None:
        cases = [
            ("Add login page", "feat"),
            ("implement cache", "feat"),
            ("new dashboard", "feat"),
            ("Fix typo in header", "fix"),
            ("bug in parser", "fix"),
            ("Remove old files", "removed"),
            ("deprecate v1 endpoints", "deprecated"),
            ("Refactor module layout", "refactor"),
            ("rewrite parser", "refactor"),
            ("documentation tweaks", "docs"),
            ("formatting", "style"),
            ("tests for api", "test"),
            ("build scripts", "chore"),
            ("security patch", "security"),
            ("Bump dependencies", "other"),
        ]
        for message, expected in cases:
            with self.subTest(message=message):
                record = parse_commit_message("abc", message)
                self.assertEqual(record.kind, expected)
                self.assertEqual(record.description, message)
                self.assertIsNone(record.scope)

    def test_first_rule_wins(self) -> None:
        # "address" starts with "add" and the feat rule is evaluated first
        self.assertEqual(infer_kind("address review comments"), CommitKind.FEAT)

    def test_break_marks_breaking(self) -> None:
        self.assertTrue(parse_commit_message("abc", "Refactor to break old API").breaking)
        self.assertTrue(parse_commit_message("abc", "big break in config").breaking)
        self.assertFalse(parse_commit_message("abc", "update readme").breaking)

    def test_empty_message(self) -> None:
        record = parse_commit_message("", "")
        self.assertEqual(record.kind, "other")
        self.assertEqual(record.description, "")
        self.assertFalse(record.breaking)


def test_record_is_immutable():
    record = parse_commit_message("abc", "fix: x")
    assert isinstance(record, CommitRecord)
    with pytest.raises(Exception):
        record.kind = "feat"  # type: ignore[misc]


@pytest.mark.parametrize(
    "line, expected_hash, expected_message",
    [
        ("0123456789abcdef|feat: add x", "0123456", "feat: add x"),
        ("0123456789abcdef|fix: handle a|b input", "0123456", "fix: handle a|b input"),
        ("0123456789abcdef", "0123456", ""),
    ],
)
def test_parse_log_line(line, expected_hash, expected_message):
    record = parse_log_line(line)
    assert record.hash == expected_hash
    assert record.message == expected_message


if __name__ == "__main__":
    unittest.main()
