import unittest

from gdrivedl.util.mime import FOLDER_MIME
from gdrivedl.util.query import (
    children_query,
    escape_query_value,
    folder_query,
    name_equals_query,
)


class TestUtilQuery(unittest.TestCase):
    def test_escape_quotes_and_backslashes(self) -> None:
        self.assertEqual(escape_query_value("it's"), "it\\'s")
        self.assertEqual(escape_query_value("a\\b"), "a\\\\b")
        self.assertEqual(escape_query_value("plain"), "plain")

    def test_name_equals_query(self) -> None:
        self.assertEqual(
            name_equals_query("report.csv"),
            "name = 'report.csv' and trashed = false",
        )
        self.assertIn("name = 'Bob\\'s file'", name_equals_query("Bob's file"))

    def test_folder_query_with_and_without_parent(self) -> None:
        q = folder_query("Reports")
        self.assertIn(f"mimeType = '{FOLDER_MIME}'", q)
        self.assertIn("name = 'Reports'", q)
        self.assertNotIn("in parents", q)

        q = folder_query("2024", "P1")
        self.assertTrue(q.endswith("and 'P1' in parents"))

    def test_children_query(self) -> None:
        self.assertEqual(children_query("F1"), "trashed = false and 'F1' in parents")


if __name__ == "__main__":
    unittest.main()
