import unittest
from unittest.mock import MagicMock

from vc_release_helper.analysis.change_classifier import (
    BumpLevel,
    Reason,
    ReasonCode,
    analyze,
    analyze_last_commit,
)


def codes(analysis):
    return [reason.code for reason in analysis.reasons]


class TestAnalyze(unittest.TestCase):
    def test_major_keywords(self) -> None:
        for message in ["BREAKING: new config format", "remove legacy api", "Rewrite parser", "delete old flags"]:
            with self.subTest(message=message):
                analysis = analyze(message, ["src/app.py"])
                self.assertEqual(analysis.bump_level, BumpLevel.MAJOR)
                self.assertEqual(codes(analysis), [ReasonCode.BREAKING_CHANGE])

    def test_major_is_not_downgraded_by_other_rules(self) -> None:
        analysis = analyze(
            "breaking: add new feature and fix bug",
            ["index.js", "app.config.js"],
            ["src/new.ts"],
        )
        self.assertEqual(analysis.bump_level, BumpLevel.MAJOR)
        self.assertEqual(codes(analysis), [ReasonCode.BREAKING_CHANGE])

    def test_substring_quirk_fires_inside_unrelated_words(self) -> None:
        # "remov" is a major keyword, so it also matches inside "removable"
        analysis = analyze("make sidebar removable", [])
        self.assertEqual(analysis.bump_level, BumpLevel.MAJOR)

    def test_critical_file_with_config_change_is_minor(self) -> None:
        analysis = analyze("tweak settings", ["package.json", "tasks.config.js"])
        self.assertEqual(analysis.bump_level, BumpLevel.MINOR)
        self.assertEqual(codes(analysis), [ReasonCode.CONFIG_MODIFIED])

    def test_critical_file_without_config_change_stays_patch(self) -> None:
        analysis = analyze("tweak settings", ["package.json"])
        self.assertEqual(analysis.bump_level, BumpLevel.PATCH)
        self.assertEqual(codes(analysis), [ReasonCode.SMALL_CHANGE])

    def test_config_change_without_critical_file_stays_patch(self) -> None:
        analysis = analyze("tweak settings", ["vite.config.ts"])
        self.assertEqual(analysis.bump_level, BumpLevel.PATCH)

    def test_minor_keywords(self) -> None:
        analysis = analyze("feat: implement export", ["src/export.ts"])
        self.assertEqual(analysis.bump_level, BumpLevel.MINOR)
        self.assertEqual(codes(analysis), [ReasonCode.NEW_FEATURE])

    def test_minor_keyword_after_config_rule_adds_no_reason(self) -> None:
        analysis = analyze("add option", ["index.ts", "app.config.ts"])
        self.assertEqual(analysis.bump_level, BumpLevel.MINOR)
        self.assertEqual(codes(analysis), [ReasonCode.CONFIG_MODIFIED])

    def test_new_files_embed_count(self) -> None:
        analysis = analyze("update utils", ["a.py", "b.py", "c.py"], ["a.py", "b.py"])
        self.assertEqual(analysis.bump_level, BumpLevel.MINOR)
        self.assertEqual(analysis.reasons, [Reason(ReasonCode.NEW_FILES, count=2)])

    def test_patch_keywords_add_reason_without_changing_level(self) -> None:
        analysis = analyze("fix crash on startup", ["src/main.py"])
        self.assertEqual(analysis.bump_level, BumpLevel.PATCH)
        self.assertEqual(codes(analysis), [ReasonCode.BUG_FIX])

    def test_patch_keyword_ignored_once_minor(self) -> None:
        analysis = analyze("fix typo", ["x.py"], ["x.py"])
        self.assertEqual(codes(analysis), [ReasonCode.NEW_FILES])

    def test_fallback_small_change(self) -> None:
        analysis = analyze("update readme wording", ["README.md"])
        self.assertEqual(analysis.bump_level, BumpLevel.PATCH)
        self.assertEqual(codes(analysis), [ReasonCode.SMALL_CHANGE])

    def test_empty_message_defaults_to_patch(self) -> None:
        analysis = analyze("", [])
        self.assertEqual(analysis.bump_level, BumpLevel.PATCH)
        self.assertEqual(len(analysis.reasons), 1)

    def test_keeps_message_and_files(self) -> None:
        analysis = analyze("Fix Bug", ("a.py",))
        self.assertEqual(analysis.commit_message, "Fix Bug")
        self.assertEqual(analysis.files_changed, ["a.py"])


class TestAnalyzeLastCommit(unittest.TestCase):
    def test_reads_from_git_client(self) -> None:
        git = MagicMock()
        git.last_commit_message.return_value = "feat: add exporter"
        git.files_changed_in_last_commit.return_value = ["src/exporter.ts"]
        git.files_added_in_last_commit.return_value = ["src/exporter.ts"]
        analysis = analyze_last_commit(git)
        self.assertEqual(analysis.bump_level, BumpLevel.MINOR)
        self.assertEqual(analysis.files_changed, ["src/exporter.ts"])
        self.assertEqual(codes(analysis), [ReasonCode.NEW_FEATURE])


if __name__ == "__main__":
    unittest.main()
