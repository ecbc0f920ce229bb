"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class FileDescriptor:
    """
    Snapshot of a Drive file as returned by a single API call.

    Notes:
        - `name` is not unique on Drive.
        - `mime_type` may be empty when the call did not request it.
    """

    file_id: str
    name: str
    mime_type: str = ""
    size: Optional[int] = None


@dataclass(slots=True, frozen=True)
class DriveDescriptor:
    """A shared drive (id + display name)."""

    drive_id: str
    name: str
