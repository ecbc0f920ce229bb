"""Field masks for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = "id,name,mimeType,size"

NAME_FIELDS: str = "id,name"

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

FIRST_MATCH_FIELDS: str = f"files({FILE_FIELDS})"

DRIVE_LIST_FIELDS: str = "nextPageToken,drives(id,name)"
