from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"

GOOGLE_DOC_MIME: str = "application/vnd.google-apps.document"
GOOGLE_SHEET_MIME: str = "application/vnd.google-apps.spreadsheet"
GOOGLE_SLIDE_MIME: str = "application/vnd.google-apps.presentation"


@dataclass(slots=True, frozen=True)
class ExportFormat:
    mime_type: str
    suffix: str


EXPORT_FORMATS: dict[str, ExportFormat] = {
    GOOGLE_DOC_MIME: ExportFormat(
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ".docx",
    ),
    GOOGLE_SHEET_MIME: ExportFormat(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        ".xlsx",
    ),
    GOOGLE_SLIDE_MIME: ExportFormat(
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        ".pptx",
    ),
}


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Returns True if the MIME type is a Google 'apps' type."""
    return mime_type.startswith("application/vnd.google-apps.")


def export_format_for(mime_type: str) -> Optional[ExportFormat]:
    """
    Return the export format for a Google-native type, or None for a raw copy.

    Only Docs, Sheets and Slides are exported; every other type (including
    other Google-apps types) goes through the raw media download.
    """
    return EXPORT_FORMATS.get(mime_type)


def local_file_name(name: str, mime_type: str) -> str:
    """Name of the local file for a Drive item (export suffix appended)."""
    fmt = export_format_for(mime_type)
    if fmt is None:
        return name
    return name + fmt.suffix
