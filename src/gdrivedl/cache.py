"""Optional time-bounded cache for shared-drive and folder id lookups."""

from __future__ import annotations

import time
from typing import Callable, Hashable, Optional


class ResolutionCache:
    """
    In-memory TTL cache for path resolution.

    Only shared-drive ids and folder ids are cached; file listings never are.
    Entries expire `ttl_sec` after insertion and are dropped by clear().
    """

    def __init__(
        self,
        ttl_sec: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_sec <= 0:
            raise ValueError("ttl_sec must be positive")
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, str]] = {}

    def get_drive_id(self, drive_name: str) -> Optional[str]:
        return self._get(("drive", drive_name.casefold()))

    def put_drive_id(self, drive_name: str, drive_id: str) -> None:
        self._put(("drive", drive_name.casefold()), drive_id)

    def get_folder_id(self, drive_id: str, parent_id: str, folder_name: str) -> Optional[str]:
        return self._get(("folder", drive_id, parent_id, folder_name))

    def put_folder_id(
        self,
        drive_id: str,
        parent_id: str,
        folder_name: str,
        folder_id: str,
    ) -> None:
        self._put(("folder", drive_id, parent_id, folder_name), folder_id)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _get(self, key: Hashable) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def _put(self, key: Hashable, value: str) -> None:
        self._entries[key] = (self._clock() + self._ttl_sec, value)
