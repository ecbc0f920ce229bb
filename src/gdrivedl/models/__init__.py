"""Public model exports for gdrivedl."""

from __future__ import annotations

from .file_info import DriveDescriptor, FileDescriptor
from .folder_path import FolderPath
from .selector import ByExactName, ById, ByNameContains, ByRegex, Selector

__all__ = [
    "FileDescriptor",
    "DriveDescriptor",
    "FolderPath",
    "Selector",
    "ById",
    "ByExactName",
    "ByNameContains",
    "ByRegex",
]
