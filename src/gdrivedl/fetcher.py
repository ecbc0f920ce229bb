"""FileFetcher: write a Drive file (raw or exported) into a local directory."""

from __future__ import annotations

import logging
import os
from typing import IO, Callable, Optional, Protocol

from gdrivedl.config import DownloadOptions
from gdrivedl.controller.fields import FILE_FIELDS, NAME_FIELDS
from gdrivedl.errors import GDriveDlError, InvalidInputError, IOFailureError
from gdrivedl.models import FileDescriptor
from gdrivedl.util.mime import export_format_for, is_folder, is_google_app, local_file_name

_UNSAFE_NAME_CHARS = ("/", "\0")


class DriveMedia(Protocol):
    """The subset of GoogleDriveController the fetcher depends on."""

    def get(self, file_id: str, *, fields: str = ...) -> FileDescriptor: ...

    def download_media(
        self, file_id: str, fh: IO[bytes], *, acknowledge_abuse: bool = False
    ) -> None: ...

    def export_media(self, file_id: str, mime_type: str, fh: IO[bytes]) -> None: ...


class FileFetcher:
    """Materializes resolved files on local disk."""

    def __init__(
        self,
        media: DriveMedia,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._media = media
        self._log = logger or logging.getLogger(__name__)

    def fetch(
        self,
        descriptor: FileDescriptor,
        destination_dir: str | os.PathLike[str],
        options: Optional[DownloadOptions] = None,
    ) -> str:
        """
        Download or export `descriptor` into `destination_dir`.

        Metadata is always re-read from Drive; the name and type carried by
        `descriptor` are not trusted. Google Docs/Sheets/Slides are exported
        to .docx/.xlsx/.pptx, everything else is copied byte for byte.

        Returns:
            The local file name (with export suffix, if any).

        Raises:
            IOFailureError: directory creation, local write or transfer failed.
            InvalidInputError: the id names a folder.
        """
        opts = options or DownloadOptions()
        directory = _ensure_directory(destination_dir, self._log)

        meta = self._media.get(descriptor.file_id, fields=FILE_FIELDS)
        if is_folder(meta.mime_type):
            raise InvalidInputError(
                f"Cannot download a folder: {meta.name}",
                details={"file_id": meta.file_id},
            )
        fmt = export_format_for(meta.mime_type)

        if fmt is not None:
            file_name = _safe_local_name(local_file_name(meta.name, meta.mime_type))
            self._log.info(
                "Exporting %s (%s) as %s",
                meta.name,
                meta.mime_type,
                fmt.mime_type,
            )

            def write(fh: IO[bytes]) -> None:
                self._media.export_media(meta.file_id, fmt.mime_type, fh)

        else:
            file_name = _safe_local_name(meta.name)
            if is_google_app(meta.mime_type):
                self._log.warning(
                    "%s has Google type %s with no export format; trying raw download",
                    meta.name,
                    meta.mime_type,
                )
            self._log.info("Downloading %s", meta.name)

            def write(fh: IO[bytes]) -> None:
                self._media.download_media(
                    meta.file_id,
                    fh,
                    acknowledge_abuse=opts.acknowledge_abuse,
                )

        self._write(os.path.join(directory, file_name), meta.file_id, write)
        return file_name

    def fetch_raw(self, file_id: str, destination_dir: str | os.PathLike[str]) -> str:
        """
        Copy the raw bytes of `file_id` into `destination_dir`.

        Skips MIME dispatch; only the display name is looked up.
        """
        directory = _ensure_directory(destination_dir, self._log)
        meta = self._media.get(file_id, fields=NAME_FIELDS)
        file_name = _safe_local_name(meta.name)

        self._log.info("Downloading %s", meta.name)
        self._write(
            os.path.join(directory, file_name),
            file_id,
            lambda fh: self._media.download_media(file_id, fh),
        )
        return file_name

    def _write(
        self,
        target: str,
        file_id: str,
        writer: Callable[[IO[bytes]], None],
    ) -> None:
        # A failure mid-stream leaves the partial file in place.
        try:
            with open(target, "wb") as fh:
                writer(fh)
        except OSError as exc:
            raise IOFailureError(
                "Failed to write local file",
                details={"path": target, "file_id": file_id},
                cause=exc,
            ) from exc
        except GDriveDlError as exc:
            raise IOFailureError(
                f"Failed to transfer file: {exc}",
                details={"path": target, "file_id": file_id, **exc.details},
                cause=exc,
            ) from exc
        self._log.info("Saved %s", target)


def _ensure_directory(path: str | os.PathLike[str], log: logging.Logger) -> str:
    directory = os.fspath(path)
    if os.path.isdir(directory):
        return directory
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as exc:
        raise IOFailureError(
            "Failed to create output directory",
            details={"path": os.path.abspath(directory)},
            cause=exc,
        ) from exc
    log.info("Created output directory: %s", os.path.abspath(directory))
    return directory


def _safe_local_name(name: str) -> str:
    for ch in _UNSAFE_NAME_CHARS:
        name = name.replace(ch, "_")
    if name in ("", ".", ".."):
        name = name.replace(".", "_") or "_"
    return name
