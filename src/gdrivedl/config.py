"""Runtime configuration for gdrivedl."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional

from gdrivedl.errors import InvalidInputError

READONLY_SCOPE: str = "https://www.googleapis.com/auth/drive.readonly"

ENV_PREFIX: str = "GDRIVEDL_"


@dataclass(slots=True, frozen=True)
class DownloaderConfig:
    """
    Settings shared by the locator, fetcher and Drive controller.

    max_listing_results caps every paginated listing (files and shared drives).
    None means "follow nextPageToken until exhausted". When a listing is cut
    short by the cap a warning is logged.

    cache_ttl_sec enables the drive/folder resolution cache; None disables it.

    application_name is sent as the User-Agent of every Drive request.

    supports_all_drives also applies to lookups that are not folder-scoped
    (by exact name, substring, regex): they then include shared-drive items
    (includeItemsFromAllDrives) besides My Drive and shared-with-me files, so
    the candidate set and its order can differ from a My Drive-only listing.
    Set it to False to list without shared drives. Folder-path lookups always
    query their shared drive regardless.
    """

    scopes: tuple[str, ...] = (READONLY_SCOPE,)
    timeout_sec: float = 300.0
    application_name: str = "gdrivedl"
    supports_all_drives: bool = True
    file_page_size: int = 1000
    drive_page_size: int = 100
    max_listing_results: Optional[int] = None
    chunk_size: int = 10 * 1024 * 1024
    cache_ttl_sec: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("scopes must be a non-empty sequence of strings")
        if self.timeout_sec <= 0:
            raise ValueError("timeout_sec must be positive")
        # Drive caps files.list at 1000 and drives.list at 100 per page.
        if not 1 <= self.file_page_size <= 1000:
            raise ValueError("file_page_size must be between 1 and 1000")
        if not 1 <= self.drive_page_size <= 100:
            raise ValueError("drive_page_size must be between 1 and 100")
        if self.max_listing_results is not None and self.max_listing_results < 1:
            raise ValueError("max_listing_results must be positive or None")
        if self.chunk_size < 256 * 1024:
            raise ValueError("chunk_size must be at least 256 KiB")
        if self.cache_ttl_sec is not None and self.cache_ttl_sec <= 0:
            raise ValueError("cache_ttl_sec must be positive or None")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> DownloaderConfig:
        """
        Build a config from GDRIVEDL_* environment variables.

        Keyword overrides win over the environment.

        Raises:
            InvalidInputError: if a variable cannot be parsed or is out of range.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for name, parse in _ENV_PARSERS.items():
            raw = env.get(ENV_PREFIX + name.upper(), "").strip()
            if not raw:
                continue
            try:
                values[name] = parse(raw)
            except ValueError as exc:
                raise InvalidInputError(
                    "Invalid configuration value",
                    details={"variable": ENV_PREFIX + name.upper(), "value": raw},
                    cause=exc,
                ) from exc

        values.update(overrides)
        try:
            return cls(**values)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc), cause=exc) from exc

    def with_overrides(self, **changes: Any) -> DownloaderConfig:
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise InvalidInputError(
                "Unknown configuration field",
                details={"fields": sorted(unknown)},
            )
        try:
            return replace(self, **changes)
        except ValueError as exc:
            raise InvalidInputError(str(exc), cause=exc) from exc


@dataclass(slots=True, frozen=True)
class DownloadOptions:
    """
    Per-call download options.

    acknowledge_abuse: allow downloading a file Drive has flagged as abusive
    (raw downloads only; exports ignore it).
    """

    acknowledge_abuse: bool = False


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_optional_int(value: str) -> Optional[int]:
    if value.lower() == "none":
        return None
    return int(value)


def _parse_optional_float(value: str) -> Optional[float]:
    if value.lower() == "none":
        return None
    return float(value)


_ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "timeout_sec": float,
    "supports_all_drives": _parse_bool,
    "file_page_size": int,
    "drive_page_size": int,
    "max_listing_results": _parse_optional_int,
    "chunk_size": int,
    "cache_ttl_sec": _parse_optional_float,
}
