import unittest
from unittest.mock import MagicMock

import pytest

from vc_release_helper.analysis.changelog import (
    ChangelogSections,
    commits_since_last_tag,
    group_by_type,
    normalize_entry,
    remove_duplicates,
    render_sections,
)
from vc_release_helper.analysis.commit_parser import CommitRecord, parse_commit_message


def record(kind: str, description: str, breaking: bool = False, scope=None) -> CommitRecord:
    return CommitRecord(
        hash="abc1234",
        message=f"{kind}: {description}",
        kind=kind,
        description=description,
        breaking=breaking,
        scope=scope,
    )


class TestRemoveDuplicates(unittest.TestCase):
    def test_exact_duplicates(self) -> None:
        self.assertEqual(remove_duplicates(["fix bug", "fix bug", "add feature"]), ["fix bug", "add feature"])

    def test_case_insensitive_near_duplicates(self) -> None:
        result = remove_duplicates(["fix bug in api", "fix bug in API", "add feature"])
        self.assertEqual(result, ["fix bug in api", "add feature"])

    def test_punctuation_is_ignored_and_first_spelling_kept(self) -> None:
        result = remove_duplicates(["Fix: crash on start!", "fix crash on start"])
        self.assertEqual(result, ["Fix: crash on start!"])

    def test_empty_and_single(self) -> None:
        self.assertEqual(remove_duplicates([]), [])
        self.assertEqual(remove_duplicates(["x"]), ["x"])

    def test_distinct_entries_are_kept_in_order(self) -> None:
        entries = ["add login page", "remove legacy api", "improve docs"]
        self.assertEqual(remove_duplicates(entries), entries)

    def test_entries_that_normalize_to_empty_collapse(self) -> None:
        self.assertEqual(remove_duplicates(["!!!", "???"]), ["!!!"])

    def test_normalize_entry(self) -> None:
        self.assertEqual(normalize_entry("  **API**:   Add   endpoint!  "), "api add endpoint")


class TestGroupByType(unittest.TestCase):
    def test_sections_by_kind(self) -> None:
        commits = [
            record("feat", "add login"),
            record("feature", "add logout"),
            record("fix", "fix crash"),
            record("removed", "drop v1"),
            record("remove", "drop v0"),
            record("deprecated", "old flag"),
            record("security", "escape html"),
            record("refactor", "split module"),
            record("perf", "cache lookups"),
            record("other", "misc"),
            record("revert", "undo thing"),
        ]
        sections = group_by_type(commits)
        self.assertEqual(sections.added, ["add login", "add logout"])
        self.assertEqual(sections.fixed, ["fix crash"])
        self.assertEqual(sections.removed, ["drop v1", "drop v0"])
        self.assertEqual(sections.deprecated, ["old flag"])
        self.assertEqual(sections.security, ["escape html"])
        self.assertEqual(sections.changed, ["split module", "cache lookups"])
        self.assertEqual(sections.other, ["misc", "undo thing"])
        self.assertEqual(sections.breaking, [])

    def test_housekeeping_kinds_are_dropped(self) -> None:
        for kind in ["chore", "docs", "style", "test", "build", "ci"]:
            with self.subTest(kind=kind):
                sections = group_by_type([record(kind, "something")])
                self.assertTrue(sections.is_empty())

    def test_breaking_housekeeping_commit_is_kept(self) -> None:
        sections = group_by_type([record("chore", "drop node 14", breaking=True)])
        self.assertEqual(len(sections.breaking), 1)
        self.assertIn("drop node 14", sections.breaking[0])

    def test_breaking_commit_only_in_breaking(self) -> None:
        sections = group_by_type([record("feat", "new api", breaking=True)])
        self.assertEqual(sections.added, [])
        self.assertEqual(sections.breaking, ["⚠️ **BREAKING CHANGE**: new api"])

    def test_scope_is_bold_prefix(self) -> None:
        sections = group_by_type([parse_commit_message("abc", "feat(api): add endpoint")])
        self.assertEqual(sections.added, ["**api**: add endpoint"])

    def test_empty_input(self) -> None:
        self.assertTrue(group_by_type([]).is_empty())


class TestRenderSections(unittest.TestCase):
    def test_fixed_order_and_bullets(self) -> None:
        sections = ChangelogSections(
            breaking=["b"],
            added=["a"],
            changed=["c"],
            deprecated=["d"],
            removed=["r"],
            fixed=["f"],
            security=["s"],
            other=["o"],
        )
        text = render_sections(sections)
        labels = ["Breaking Changes", "Added", "Changed", "Deprecated", "Removed", "Fixed", "Security", "Other"]
        positions = [text.index(label) for label in labels]
        self.assertEqual(positions, sorted(positions))
        self.assertIn("### ✨ Added\n\n- a", text)
        self.assertTrue(text.startswith("### "))

    def test_empty_sections_are_omitted(self) -> None:
        text = render_sections(ChangelogSections(fixed=["fix crash"]))
        self.assertEqual(text, "### 🐛 Fixed\n\n- fix crash")

    def test_duplicates_removed_per_section(self) -> None:
        text = render_sections(ChangelogSections(added=["add login", "Add login."]))
        self.assertEqual(text.count("- "), 1)


def test_commits_since_last_tag_uses_tag_range():
    git = MagicMock()
    git.latest_tag.return_value = "v1.0.0"
    git.log_since.return_value = "1111111aaaa|feat: add x\n2222222bbbb|fix: y\n"
    commits = commits_since_last_tag(git)
    git.log_since.assert_called_once_with("v1.0.0")
    assert [c.hash for c in commits] == ["1111111", "2222222"]
    assert [c.kind for c in commits] == ["feat", "fix"]


def test_commits_since_last_tag_without_tag_uses_full_history():
    git = MagicMock()
    git.latest_tag.return_value = ""
    git.log_since.return_value = "1111111aaaa|initial commit"
    commits = commits_since_last_tag(git)
    git.log_since.assert_called_once_with(None)
    assert len(commits) == 1


@pytest.mark.parametrize("output", ["", "\n\n"])
def test_commits_since_last_tag_empty_history(output):
    git = MagicMock()
    git.latest_tag.return_value = ""
    git.log_since.return_value = output
    assert commits_since_last_tag(git) == []


if __name__ == "__main__":
    unittest.main()
