"""End-to-end changelog generation from raw commit lines."""

import unittest
from datetime import date

from conventional_changelog.changelog import generate_changelog
from conventional_changelog.rendering.formats import Format
from conventional_changelog.rendering.renderer import RenderOptions


def today() -> date:
    return date(2019, 5, 25)


BREAKING = ["fix: sub|BREAKING CHANGE: Test|long_hash|short_hash|Jiri Otahal|time"]
MERGES = [
    "Merge ...||long_hash|short_hash|Jiri Otahal|time",
    "Custom Merge...||long_hash|short_hash|Jiri Otahal|time",
    "fix(test): sub||long_hash|short_hash|Jiri Otahal|time",
]


class TestGenerateChangelog(unittest.TestCase):
    def test_breaking_change_markdown(self) -> None:
        self.assertEqual(
            generate_changelog(BREAKING, "1.0.2", today=today),
            "# 1.0.2 () (2019-05-25)\n \n ### Bug fixes\n - sub ([short_hash](/long_hash))"
            "\n \n ### BREAKING CHANGES\n - Test ([short_hash](/long_hash))",
        )

    def test_breaking_change_slack(self) -> None:
        self.assertEqual(
            generate_changelog(BREAKING, "1.0.2", RenderOptions(format=Format.SLACK), today),
            "*1.0.2 () (2019-05-25)*\n \n *Bug fixes*\n - sub (</long_hash|short_hash>)"
            "\n \n *BREAKING CHANGES*\n - Test (</long_hash|short_hash>)",
        )

    def test_hidden_header(self) -> None:
        expected = {
            Format.MARKDOWN: "### Bug fixes\n - sub ([short_hash](/long_hash))"
            "\n \n ### BREAKING CHANGES\n - Test ([short_hash](/long_hash))",
            Format.PLAIN: "Bug fixes:\n - sub (/long_hash)\n \n BREAKING CHANGES:\n - Test (/long_hash)",
            Format.SLACK: "*Bug fixes*\n - sub (</long_hash|short_hash>)"
            "\n \n *BREAKING CHANGES*\n - Test (</long_hash|short_hash>)",
        }
        for fmt, text in expected.items():
            with self.subTest(format=fmt):
                options = RenderOptions(format=fmt, display_title=False)
                self.assertEqual(generate_changelog(BREAKING, "1.0.2", options, today), text)

    def test_author(self) -> None:
        self.assertEqual(
            generate_changelog(BREAKING, "1.0.2", RenderOptions(display_author=True), today),
            "# 1.0.2 () (2019-05-25)\n \n ### Bug fixes\n - sub ([short_hash](/long_hash)) - Jiri Otahal"
            "\n \n ### BREAKING CHANGES\n - Test ([short_hash](/long_hash)) - Jiri Otahal",
        )

    def test_merge_commits_skipped(self) -> None:
        self.assertEqual(
            generate_changelog(MERGES, "1.0.2", today=today),
            "# 1.0.2 () (2019-05-25)\n \n ### Bug fixes\n - **test:** sub ([short_hash](/long_hash))"
            "\n \n ### Other work\n - Custom Merge... ([short_hash](/long_hash))",
        )
        self.assertEqual(
            generate_changelog(MERGES, "1.0.2", RenderOptions(format=Format.SLACK), today),
            "*1.0.2 () (2019-05-25)*\n \n *Bug fixes*\n - *test:* sub (</long_hash|short_hash>)"
            "\n \n *Other work*\n - Custom Merge... (</long_hash|short_hash>)",
        )

    def test_ignore_scopes(self) -> None:
        self.assertEqual(
            generate_changelog(MERGES, "1.0.2", RenderOptions(display_title=False), today, ignore_scopes=["test"]),
            "### Other work\n - Custom Merge... ([short_hash](/long_hash))",
        )

    def test_signed_off_trailer_stays_out_of_output(self) -> None:
        records = ["feat: a|BREAKING CHANGE: drop v1\n\nSigned-off-by: Bob <b@x>\n|L|S|A|1558742400"]
        text = generate_changelog(records, "1.0.2", RenderOptions(display_title=False), today)
        self.assertEqual(
            text,
            "### Features\n - a ([S](/L))\n \n ### BREAKING CHANGES\n - drop v1 ([S](/L))",
        )
        for line in text.split("\n")[1:]:
            self.assertTrue(line.startswith(" "))

    def test_repeatable(self) -> None:
        first = generate_changelog(MERGES + BREAKING, "1.0.2", today=today)
        second = generate_changelog(MERGES + BREAKING, "1.0.2", today=today)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
