import io
import logging
import tempfile
import unittest
from pathlib import Path
from typing import Optional
from unittest.mock import Mock, patch

from gdrivedl.config import DownloaderConfig, DownloadOptions
from gdrivedl.controller.fields import FILE_FIELDS, NAME_FIELDS
from gdrivedl.downloader import GoogleDriveDownloader
from gdrivedl.errors import AmbiguousPathError, InvalidInputError, NotFoundError
from gdrivedl.models import ByNameContains, DriveDescriptor, FileDescriptor
from gdrivedl.util.mime import FOLDER_MIME, GOOGLE_SHEET_MIME
from gdrivedl.util.query import name_equals_query


class FakeController:
    """Drive stand-in covering both the listing and the media side."""

    def __init__(self, config: Optional[DownloaderConfig] = None) -> None:
        self.config = config or DownloaderConfig()
        self.calls: list[tuple] = []
        self.items: dict[str, tuple[str, str, bytes]] = {}
        self.root_order: list[str] = []
        self.drives = [DriveDescriptor("D1", "FinanceDrive")]
        self.folders = {("D1", "Reports"): "R1", ("R1", "2023"): "Y23"}
        self.children: dict[str, list[str]] = {"Y23": []}

    def add(self, file_id, name, mime_type, content=b"", *, parent=None) -> None:
        self.items[file_id] = (name, mime_type, content)
        if parent is None:
            self.root_order.append(file_id)
        else:
            self.children.setdefault(parent, []).append(file_id)

    def _desc(self, file_id: str) -> FileDescriptor:
        name, mime_type, content = self.items[file_id]
        return FileDescriptor(file_id, name, mime_type, len(content))

    def get(self, file_id: str, *, fields: str = FILE_FIELDS) -> FileDescriptor:
        self.calls.append(("get", file_id, fields))
        if file_id not in self.items:
            raise NotFoundError("File not found", details={"file_id": file_id})
        return self._desc(file_id)

    def find_first(self, query: str, *, drive_id=None):
        self.calls.append(("find_first", query, drive_id))
        if query.startswith("mimeType"):
            for (parent_id, name), folder_id in self.folders.items():
                if f"name = '{name}'" in query and f"'{parent_id}' in parents" in query:
                    return FileDescriptor(folder_id, name, FOLDER_MIME)
            return None
        for file_id in self.root_order:
            if query == name_equals_query(self.items[file_id][0]):
                return self._desc(file_id)
        return None

    def iter_files(self, query: str, *, drive_id=None):
        self.calls.append(("iter_files", query, drive_id))
        if drive_id is None:
            ids = self.root_order
        else:
            ids = next(
                (kids for fid, kids in self.children.items() if f"'{fid}' in parents" in query),
                [],
            )
        for file_id in ids:
            yield self._desc(file_id)

    def iter_shared_drives(self):
        self.calls.append(("iter_shared_drives",))
        return iter(self.drives)

    def download_media(self, file_id, fh, *, acknowledge_abuse=False) -> None:
        self.calls.append(("download_media", file_id, acknowledge_abuse))
        fh.write(self.items[file_id][2])

    def export_media(self, file_id, mime_type, fh) -> None:
        self.calls.append(("export_media", file_id, mime_type))
        fh.write(b"xlsx-bytes")

    def kinds(self) -> list[str]:
        return [c[0] for c in self.calls]


class TestGoogleDriveDownloader(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name) / "out"
        self.ctrl = FakeController()
        self.ctrl.add("1", "report.csv", "text/csv", b"a,b")
        self.ctrl.add("2", "backup_2024.zip", "application/zip", b"PK2024")
        self.ctrl.add("3", "backup_9999.zip", "application/zip", b"PK9999")
        self.ctrl.add("S", "Budget", GOOGLE_SHEET_MIME, parent="Y23")
        self.ctrl.add("T", "summary.pdf", "application/pdf", b"%PDF", parent="Y23")
        self.dl = GoogleDriveDownloader.from_controller(self.ctrl)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_download_by_id_writes_remote_name_and_bytes(self) -> None:
        name = self.dl.download_by_id("2", self.out)
        self.assertEqual(name, "backup_2024.zip")
        self.assertEqual((self.out / name).read_bytes(), b"PK2024")
        self.assertEqual(self.ctrl.calls[0], ("get", "2", NAME_FIELDS))

    def test_download_by_id_unknown(self) -> None:
        with self.assertRaises(NotFoundError):
            self.dl.download_by_id("nope", self.out)

    def test_download_by_name(self) -> None:
        self.assertEqual(self.dl.download_by_name("report.csv", self.out), "report.csv")
        with self.assertRaises(NotFoundError):
            self.dl.download_by_name("absent.csv", self.out)

    def test_download_by_name_contains(self) -> None:
        self.assertEqual(self.dl.download_by_name_contains("backup", self.out), "backup_2024.zip")

    def test_download_by_regex_first_match_by_listing_order(self) -> None:
        self.ctrl.root_order = ["1", "3", "2"]
        name = self.dl.download_by_regex(r"^backup_\d{4}\.zip$", self.out)
        self.assertEqual(name, "backup_9999.zip")

    def test_download_by_regex_example_scenario(self) -> None:
        name = self.dl.download_by_regex(r"^backup_\d{4}\.zip$", self.out)
        self.assertEqual(name, "backup_2024.zip")
        self.assertEqual((self.out / name).read_bytes(), b"PK2024")

    def test_invalid_regex_is_rejected_before_listing(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.dl.download_by_regex("(", self.out)
        self.assertEqual(self.ctrl.calls, [])

    def test_folder_path_download_exports_google_types(self) -> None:
        name = self.dl.download_by_name_contains_in_folder_path(
            "FinanceDrive/Reports/2023", "Bud", self.out
        )
        self.assertEqual(name, "Budget.xlsx")
        self.assertEqual((self.out / name).read_bytes(), b"xlsx-bytes")
        self.assertIn("export_media", self.ctrl.kinds())

    def test_regex_in_folder_path_with_acknowledge_abuse(self) -> None:
        name = self.dl.download_by_regex_in_folder_path(
            "FinanceDrive/Reports/2023",
            r"summary\.pdf",
            self.out,
            DownloadOptions(acknowledge_abuse=True),
        )
        self.assertEqual(name, "summary.pdf")
        self.assertIn(("download_media", "T", True), self.ctrl.calls)

    def test_missing_folder_never_lists_files(self) -> None:
        with self.assertRaises(AmbiguousPathError):
            self.dl.download_by_name_contains_in_folder_path(
                "FinanceDrive/Reports/2024", "summary", self.out
            )
        self.assertNotIn("iter_files", self.ctrl.kinds())
        self.assertFalse(self.out.exists())

    def test_short_folder_path_issues_no_query(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.dl.download_by_regex_in_folder_path("FinanceDrive", ".*", self.out)
        self.assertEqual(self.ctrl.calls, [])

    def test_download_smart_exports(self) -> None:
        self.assertEqual(self.dl.download_smart("S", self.out), "Budget.xlsx")

    def test_generic_download(self) -> None:
        name = self.dl.download(
            ByNameContains("summary"),
            self.out,
            folder_path="FinanceDrive/Reports/2023",
        )
        self.assertEqual(name, "summary.pdf")

    def test_resolve(self) -> None:
        found = self.dl.resolve(ByNameContains("report"))
        self.assertEqual(found.file_id, "1")

    def test_cache_from_config_and_clear(self) -> None:
        ctrl = FakeController(DownloaderConfig(cache_ttl_sec=300))
        ctrl.add("T", "summary.pdf", "application/pdf", b"%PDF", parent="Y23")
        dl = GoogleDriveDownloader.from_controller(ctrl)
        path = "FinanceDrive/Reports/2023"

        dl.download_by_name_contains_in_folder_path(path, "summary", self.out)
        dl.download_by_name_contains_in_folder_path(path, "summary", self.out)
        self.assertEqual(ctrl.kinds().count("iter_shared_drives"), 1)

        dl.clear_cache()
        dl.download_by_name_contains_in_folder_path(path, "summary", self.out)
        self.assertEqual(ctrl.kinds().count("iter_shared_drives"), 2)

    def test_no_cache_by_default(self) -> None:
        path = "FinanceDrive/Reports/2023"
        self.dl.download_by_name_contains_in_folder_path(path, "summary", self.out)
        self.dl.download_by_name_contains_in_folder_path(path, "summary", self.out)
        self.assertEqual(self.ctrl.kinds().count("iter_shared_drives"), 2)


class TestDownloaderLogging(unittest.TestCase):
    def test_listing_truncation_reaches_injected_logger(self) -> None:
        service = Mock()
        service.files.return_value.list.return_value.execute.return_value = {
            "files": [{"id": "A", "name": "a.txt"}, {"id": "B", "name": "b.txt"}]
        }
        client = Mock()
        client.build_drive_service.return_value = service
        injected = logging.getLogger("test.downloader.injected")

        with patch(
            "gdrivedl.downloader.ServiceAccountClient.from_stream", return_value=client
        ):
            dl = GoogleDriveDownloader(
                io.StringIO("{}"),
                config=DownloaderConfig(max_listing_results=1),
                logger=injected,
            )

        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs(injected, level="WARNING") as logs:
                with self.assertRaises(NotFoundError):
                    dl.download_by_name_contains("zzz", tmp)

        self.assertTrue(any("truncated at 1" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
