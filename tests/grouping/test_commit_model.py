import unittest

from conventional_changelog.grouping.commit_model import RawCommitRecord, SectionKind, format_timestamp


class TestRawCommitRecord(unittest.TestCase):
    def test_parse_six_fields(self) -> None:
        rec = RawCommitRecord.parse("docs: sub|body|long_hash|short_hash|Jiri Otahal|time")
        self.assertEqual(
            rec,
            RawCommitRecord("docs: sub", "body", "long_hash", "short_hash", "Jiri Otahal", "time"),
        )

    def test_parse_five_fields_has_no_timestamp(self) -> None:
        rec = RawCommitRecord.parse("fix: sub||long_hash|short_hash|Jiri Otahal")
        self.assertEqual(rec.author, "Jiri Otahal")
        self.assertEqual(rec.timestamp, "")
        self.assertEqual(rec.body, "")

    def test_parse_body_containing_separator(self) -> None:
        rec = RawCommitRecord.parse("feat: a|x | y|L|S|me|123")
        self.assertEqual(rec.body, "x | y")
        self.assertEqual(rec.long_hash, "L")
        self.assertEqual(rec.timestamp, "123")

    def test_parse_custom_separator_keeps_pipe_in_subject(self) -> None:
        rec = RawCommitRecord.parse("feat: add a|b operator\x1f\x1fL\x1fS\x1fme\x1f123", "\x1f")
        self.assertEqual(rec, RawCommitRecord("feat: add a|b operator", "", "L", "S", "me", "123"))

    def test_parse_pipe_in_subject_with_default_separator(self) -> None:
        rec = RawCommitRecord.parse("feat: add a|b operator||L|S|me|123")
        self.assertEqual(rec.subject, "feat: add a")
        self.assertEqual(rec.body, "b operator|")
        self.assertEqual(rec.long_hash, "L")

    def test_parse_short_lines_are_padded(self) -> None:
        self.assertEqual(RawCommitRecord.parse("just a subject"), RawCommitRecord("just a subject"))
        self.assertEqual(RawCommitRecord.parse(""), RawCommitRecord(""))


class TestSectionKind(unittest.TestCase):
    def test_display_order(self) -> None:
        self.assertEqual(
            [kind.default_title for kind in SectionKind],
            [
                "Features",
                "Bug fixes",
                "Performance improvements",
                "Reverts",
                "BREAKING CHANGES",
                "Documentation",
                "Styles",
                "Code refactoring",
                "Tests",
                "Other work",
            ],
        )

    def test_from_name(self) -> None:
        self.assertIs(SectionKind.from_name("fix"), SectionKind.BUG_FIXES)
        self.assertIs(SectionKind.from_name("breaking_changes"), SectionKind.BREAKING_CHANGES)
        with self.assertRaises(ValueError):
            SectionKind.from_name("chore")


class TestFormatTimestamp(unittest.TestCase):
    def test_epoch(self) -> None:
        self.assertEqual(format_timestamp("1558742400"), "2019-05-25")

    def test_non_numeric_is_kept(self) -> None:
        for value in ["time", "", "2019-05-25T10:00:00"]:
            with self.subTest(value=value):
                self.assertEqual(format_timestamp(value), value)


if __name__ == "__main__":
    unittest.main()
