"""FileLocator: resolve a selector (and optional folder path) to one Drive file."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, Union

from gdrivedl.cache import ResolutionCache
from gdrivedl.errors import AmbiguousPathError, InvalidInputError, NotFoundError
from gdrivedl.models import (
    ByExactName,
    ById,
    ByNameContains,
    ByRegex,
    DriveDescriptor,
    FileDescriptor,
    FolderPath,
    Selector,
)
from gdrivedl.models.selector import describe
from gdrivedl.util.query import NOT_TRASHED, children_query, folder_query, name_equals_query


class DriveListing(Protocol):
    """The subset of GoogleDriveController the locator depends on."""

    def get(self, file_id: str) -> FileDescriptor: ...

    def find_first(
        self, query: str, *, drive_id: Optional[str] = None
    ) -> Optional[FileDescriptor]: ...

    def iter_files(
        self, query: str, *, drive_id: Optional[str] = None
    ) -> Iterable[FileDescriptor]: ...

    def iter_shared_drives(self) -> Iterable[DriveDescriptor]: ...


class FileLocator:
    """
    Resolves selectors against the remote listing.

    Tie-break rule everywhere: the first match in the order Drive returns
    results. There is no secondary sort.
    """

    def __init__(
        self,
        listing: DriveListing,
        *,
        cache: Optional[ResolutionCache] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._listing = listing
        self._cache = cache
        self._log = logger or logging.getLogger(__name__)

    def resolve(
        self,
        selector: Selector,
        folder_path: Union[FolderPath, str, None] = None,
    ) -> FileDescriptor:
        """
        Resolve `selector` to exactly one file.

        Raises:
            InvalidInputError: malformed folder path, or an id selector with a path.
            NotFoundError: nothing matched (no drive, no file).
            AmbiguousPathError: a folder segment of the path does not exist.
        """
        if folder_path is not None:
            path = _as_folder_path(folder_path)
            if isinstance(selector, ById):
                raise InvalidInputError(
                    "A file id cannot be combined with a folder path",
                    details={"file_id": selector.file_id, "folder_path": str(path)},
                )
            return self._resolve_in_folder(selector, path)

        if isinstance(selector, ById):
            return self._listing.get(selector.file_id)

        if isinstance(selector, ByExactName):
            found = self._listing.find_first(name_equals_query(selector.name))
            if found is None:
                raise NotFoundError(
                    f"No file found with name: {selector.name}",
                    details={"name": selector.name},
                )
            return found

        if isinstance(selector, (ByNameContains, ByRegex)):
            candidates = self._listing.iter_files(NOT_TRASHED)
            found = self._first_match(selector, candidates)
            if found is None:
                raise NotFoundError(f"No file found with {describe(selector)}")
            return found

        raise InvalidInputError(
            "Unsupported selector",
            details={"selector": type(selector).__name__},
        )

    def find_shared_drive(self, drive_name: str) -> DriveDescriptor:
        """Find a shared drive by case-insensitive display name."""
        if self._cache is not None:
            cached = self._cache.get_drive_id(drive_name)
            if cached is not None:
                self._log.debug("Shared drive %r resolved from cache", drive_name)
                return DriveDescriptor(drive_id=cached, name=drive_name)

        wanted = drive_name.casefold()
        for drive in self._listing.iter_shared_drives():
            if drive.name.casefold() == wanted:
                self._log.info("Found shared drive: %s", drive_name)
                if self._cache is not None:
                    self._cache.put_drive_id(drive_name, drive.drive_id)
                return drive

        self._log.warning("Shared drive not found: %s", drive_name)
        raise NotFoundError(
            f"Shared drive not found: {drive_name}",
            details={"drive_name": drive_name},
        )

    def resolve_folder_path(self, folder_path: Union[FolderPath, str]) -> tuple[str, str]:
        """
        Walk the folder path and return (drive_id, leaf_folder_id).

        Segments are resolved strictly in order with no backtracking; the
        first missing segment ends the walk.

        The first folder segment must be a direct child of the shared drive's
        root ('<driveId>' in parents); a folder of that name deeper in the
        drive does not match. Include every intermediate folder in the path.
        """
        path = _as_folder_path(folder_path)
        drive = self.find_shared_drive(path.drive_name)

        parent_id = drive.drive_id
        for folder_name in path.folder_names:
            parent_id = self._resolve_folder(drive.drive_id, parent_id, folder_name, path)
        return drive.drive_id, parent_id

    # ----------------------------
    # Internals
    # ----------------------------
    def _resolve_in_folder(self, selector: Selector, path: FolderPath) -> FileDescriptor:
        drive_id, folder_id = self.resolve_folder_path(path)
        candidates = self._listing.iter_files(children_query(folder_id), drive_id=drive_id)
        found = self._first_match(selector, candidates)
        if found is None:
            raise NotFoundError(
                f"No file found with {describe(selector)} in folder path: {path}",
                details={"folder_path": str(path)},
            )
        return found

    def _resolve_folder(
        self,
        drive_id: str,
        parent_id: str,
        folder_name: str,
        path: FolderPath,
    ) -> str:
        if self._cache is not None:
            cached = self._cache.get_folder_id(drive_id, parent_id, folder_name)
            if cached is not None:
                self._log.debug("Folder %r resolved from cache", folder_name)
                return cached

        found = self._listing.find_first(
            folder_query(folder_name, parent_id),
            drive_id=drive_id,
        )
        if found is None:
            self._log.warning("Folder not found: %r (path %s)", folder_name, path)
            raise AmbiguousPathError(
                f"Folder path not found: {path}",
                details={"folder_path": str(path), "missing_segment": folder_name},
            )

        self._log.info("Found folder: %r", folder_name)
        if self._cache is not None:
            self._cache.put_folder_id(drive_id, parent_id, folder_name, found.file_id)
        return found.file_id

    def _first_match(
        self,
        selector: Selector,
        candidates: Iterable[FileDescriptor],
    ) -> Optional[FileDescriptor]:
        for candidate in candidates:
            self._log.debug("Checking: %s", candidate.name)
            if selector.matches(candidate.name):  # type: ignore[union-attr]
                return candidate
        return None


def _as_folder_path(value: Union[FolderPath, str]) -> FolderPath:
    if isinstance(value, FolderPath):
        return value
    return FolderPath.parse(value)
