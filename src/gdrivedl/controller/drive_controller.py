"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Callable, Iterator, Optional, TypeVar

import httplib2
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload

from gdrivedl.auth import ServiceAccountClient
from gdrivedl.config import DownloaderConfig
from gdrivedl.errors import (
    ApiError,
    GDriveDlError,
    HttpErrorInfo,
    NetworkError,
    map_http_error,
)
from gdrivedl.models import DriveDescriptor, FileDescriptor

from .fields import DRIVE_LIST_FIELDS, FILE_FIELDS, FIRST_MATCH_FIELDS, LIST_FIELDS

T = TypeVar("T")

_module_logger = logging.getLogger(__name__)


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - No retries: every API failure is mapped and raised immediately.
    """

    def __init__(
        self,
        client: ServiceAccountClient,
        *,
        config: Optional[DownloaderConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or DownloaderConfig()
        self._log = logger or _module_logger
        self._service = client.build_drive_service(
            self._config.scopes,
            timeout_sec=self._config.timeout_sec,
            application_name=self._config.application_name,
        )

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        config: Optional[DownloaderConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> GoogleDriveController:
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config or DownloaderConfig()
        obj._log = logger or _module_logger
        obj._service = service
        return obj

    @property
    def config(self) -> DownloaderConfig:
        return self._config

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str, *, fields: str = FILE_FIELDS) -> FileDescriptor:
        req = self._service.files().get(
            fileId=file_id,
            fields=fields,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_descriptor(data, fallback_id=file_id)

    def find_first(
        self,
        query: str,
        *,
        drive_id: Optional[str] = None,
    ) -> Optional[FileDescriptor]:
        """Return the first item matching `query` (pageSize=1), or None."""
        req = self._service.files().list(
            q=query,
            fields=FIRST_MATCH_FIELDS,
            pageSize=1,
            **self._list_kwargs(drive_id),
        )
        data = self._execute(req.execute)
        files = data.get("files") or []
        if not files:
            return None
        return _file_dict_to_descriptor(files[0])

    def iter_files(
        self,
        query: str,
        *,
        drive_id: Optional[str] = None,
    ) -> Iterator[FileDescriptor]:
        """
        Yield items matching `query` in listing order, page by page.

        Pages are fetched lazily, so a caller that stops early never requests
        the remaining pages.
        """

        def request(page_token: Optional[str]):
            return self._service.files().list(
                q=query,
                fields=LIST_FIELDS,
                pageSize=self._config.file_page_size,
                pageToken=page_token,
                **self._list_kwargs(drive_id),
            )

        for item in self._paginate(request, "files", what="files"):
            yield _file_dict_to_descriptor(item)

    def iter_shared_drives(self) -> Iterator[DriveDescriptor]:
        def request(page_token: Optional[str]):
            return self._service.drives().list(
                fields=DRIVE_LIST_FIELDS,
                pageSize=self._config.drive_page_size,
                pageToken=page_token,
            )

        for item in self._paginate(request, "drives", what="shared drives"):
            yield DriveDescriptor(
                drive_id=str(item.get("id", "")),
                name=str(item.get("name", "")),
            )

    def download_media(
        self,
        file_id: str,
        fh: IO[bytes],
        *,
        acknowledge_abuse: bool = False,
    ) -> None:
        """Stream the raw content of `file_id` into `fh`."""
        req = self._service.files().get_media(
            fileId=file_id,
            acknowledgeAbuse=acknowledge_abuse,
            **self._common_get_kwargs(),
        )
        self._stream(req, fh, file_id)

    def export_media(self, file_id: str, mime_type: str, fh: IO[bytes]) -> None:
        """Stream `file_id` converted to `mime_type` into `fh`."""
        req = self._service.files().export_media(fileId=file_id, mimeType=mime_type)
        self._stream(req, fh, file_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._config.supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _list_kwargs(self, drive_id: Optional[str]) -> dict[str, Any]:
        if drive_id is not None:
            # Drive-scoped listing always requires the all-drives flags.
            return {
                "corpora": "drive",
                "driveId": drive_id,
                "supportsAllDrives": True,
                "includeItemsFromAllDrives": True,
            }
        if not self._config.supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _paginate(
        self,
        request: Callable[[Optional[str]], Any],
        items_key: str,
        *,
        what: str,
    ) -> Iterator[dict[str, Any]]:
        limit = self._config.max_listing_results
        page_token: Optional[str] = None
        count = 0

        while True:
            data = self._execute(request(page_token).execute)
            items = data.get(items_key) or []
            page_token = data.get("nextPageToken")

            for item in items:
                if limit is not None and count >= limit:
                    self._warn_truncated(what, limit)
                    return
                count += 1
                yield item

            if not page_token:
                return
            if limit is not None and count >= limit:
                self._warn_truncated(what, limit)
                return

    def _stream(self, req: Any, fh: IO[bytes], file_id: str) -> None:
        downloader = MediaIoBaseDownload(fh, req, chunksize=self._config.chunk_size)
        done = False
        while not done:
            status, done = self._execute(downloader.next_chunk)
            if status is not None:
                self._log.debug("Download %s: %d%%", file_id, int(status.progress() * 100))

    def _warn_truncated(self, what: str, limit: int) -> None:
        self._log.warning(
            "Listing of %s truncated at %d results (max_listing_results); "
            "later matches are not considered",
            what,
            limit,
        )

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except GDriveDlError:
            raise
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> GDriveDlError:
        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError, httplib2.HttpLib2Error)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _file_dict_to_descriptor(
    data: dict[str, Any],
    *,
    fallback_id: str = "",
) -> FileDescriptor:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    return FileDescriptor(
        file_id=file_id if isinstance(file_id, str) else fallback_id,
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        size=size,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except ValueError:
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
