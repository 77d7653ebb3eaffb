from __future__ import annotations

import unittest

from lazybrowse.associations import (
    DEFAULT_ASSOCIATIONS,
    Association,
    coerce_associations,
    describe,
    open_with,
)


class OpenWithTests(unittest.TestCase):
    def test_default_table(self) -> None:
        self.assertEqual(open_with("film.mkv"), "mpv")
        self.assertEqual(open_with("photo.JPG"), "sxiv")
        self.assertEqual(open_with("page.html"), "firefox")
        self.assertEqual(open_with("paper.pdf"), "mupdf")
        self.assertEqual(open_with("build.sh"), "sh")
        self.assertEqual(open_with("README"), "less")

    def test_first_match_wins(self) -> None:
        rules = (Association(r"\.txt$", "first"), Association(r"\.txt$", "second"))
        self.assertEqual(open_with("a.txt", rules), "first")

    def test_no_match_returns_none(self) -> None:
        self.assertIsNone(open_with("a.txt", (Association(r"\.pdf$", "mupdf"),)))

    def test_invalid_rule_is_skipped(self) -> None:
        rules = (Association("(", "broken"), Association(r"\.txt$", "less"))
        self.assertEqual(open_with("a.txt", rules), "less")

    def test_match_is_unanchored(self) -> None:
        self.assertEqual(open_with("archive.pdf.bak", (Association("pdf", "mupdf"),)), "mupdf")


class CoerceAssociationsTests(unittest.TestCase):
    def test_non_list_means_use_defaults(self) -> None:
        self.assertIsNone(coerce_associations({"a": "b"}))

    def test_empty_list_disables_all_rules(self) -> None:
        self.assertEqual(coerce_associations([]), ())

    def test_describe_lists_rules_in_order(self) -> None:
        self.assertEqual(describe(DEFAULT_ASSOCIATIONS)[-1], ". -> less")


if __name__ == "__main__":
    unittest.main()
