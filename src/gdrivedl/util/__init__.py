from .mime import (
    EXPORT_FORMATS,
    FOLDER_MIME,
    GOOGLE_DOC_MIME,
    GOOGLE_SHEET_MIME,
    GOOGLE_SLIDE_MIME,
    ExportFormat,
    export_format_for,
    is_folder,
    is_google_app,
    local_file_name,
)
from .query import (
    NOT_TRASHED,
    children_query,
    escape_query_value,
    folder_query,
    name_equals_query,
)

__all__ = [
    "FOLDER_MIME",
    "GOOGLE_DOC_MIME",
    "GOOGLE_SHEET_MIME",
    "GOOGLE_SLIDE_MIME",
    "EXPORT_FORMATS",
    "ExportFormat",
    "export_format_for",
    "is_folder",
    "is_google_app",
    "local_file_name",
    "NOT_TRASHED",
    "escape_query_value",
    "name_equals_query",
    "folder_query",
    "children_query",
]
