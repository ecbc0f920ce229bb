import unittest

from gdrivedl.util.mime import (
    EXPORT_FORMATS,
    FOLDER_MIME,
    GOOGLE_DOC_MIME,
    GOOGLE_SHEET_MIME,
    GOOGLE_SLIDE_MIME,
    export_format_for,
    is_folder,
    is_google_app,
    local_file_name,
)


class TestUtilMime(unittest.TestCase):
    def test_is_folder(self) -> None:
        self.assertTrue(is_folder(FOLDER_MIME))
        self.assertFalse(is_folder("text/plain"))

    def test_is_google_app(self) -> None:
        self.assertTrue(is_google_app(GOOGLE_DOC_MIME))
        self.assertTrue(is_google_app("application/vnd.google-apps.some-new-type"))
        self.assertFalse(is_google_app("application/pdf"))

    def test_export_table(self) -> None:
        self.assertEqual(export_format_for(GOOGLE_DOC_MIME).suffix, ".docx")
        self.assertEqual(export_format_for(GOOGLE_SHEET_MIME).suffix, ".xlsx")
        self.assertEqual(export_format_for(GOOGLE_SLIDE_MIME).suffix, ".pptx")
        self.assertEqual(
            export_format_for(GOOGLE_SHEET_MIME).mime_type,
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
        self.assertEqual(len(EXPORT_FORMATS), 3)

    def test_other_types_are_raw(self) -> None:
        for mime in ("application/pdf", "text/csv", "", "application/vnd.google-apps.drawing"):
            self.assertIsNone(export_format_for(mime))

    def test_local_file_name(self) -> None:
        self.assertEqual(local_file_name("Budget", GOOGLE_SHEET_MIME), "Budget.xlsx")
        self.assertEqual(local_file_name("Deck", GOOGLE_SLIDE_MIME), "Deck.pptx")
        self.assertEqual(local_file_name("notes.txt", "text/plain"), "notes.txt")


if __name__ == "__main__":
    unittest.main()
