"""Builders for Drive `q` search expressions."""

from __future__ import annotations

from typing import Optional

from .mime import FOLDER_MIME

NOT_TRASHED: str = "trashed = false"


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside single quotes in a Drive query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def name_equals_query(name: str) -> str:
    return f"name = '{escape_query_value(name)}' and {NOT_TRASHED}"


def folder_query(name: str, parent_id: Optional[str] = None) -> str:
    q = (
        f"mimeType = '{FOLDER_MIME}' and "
        f"name = '{escape_query_value(name)}' and {NOT_TRASHED}"
    )
    if parent_id is not None:
        q += f" and '{escape_query_value(parent_id)}' in parents"
    return q


def children_query(parent_id: str) -> str:
    return f"{NOT_TRASHED} and '{escape_query_value(parent_id)}' in parents"
