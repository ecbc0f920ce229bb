"""gdrivedl public API."""

from __future__ import annotations

from gdrivedl.auth import ServiceAccountClient
from gdrivedl.cache import ResolutionCache
from gdrivedl.config import DownloaderConfig, DownloadOptions
from gdrivedl.downloader import GoogleDriveDownloader
from gdrivedl.errors import (
    AmbiguousPathError,
    ApiError,
    AuthError,
    ConflictError,
    GDriveDlError,
    HttpErrorInfo,
    InvalidInputError,
    IOFailureError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)
from gdrivedl.fetcher import FileFetcher
from gdrivedl.locator import FileLocator
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

__all__ = [
    # High-level
    "GoogleDriveDownloader",
    "FileLocator",
    "FileFetcher",
    "ResolutionCache",
    # Auth / config
    "ServiceAccountClient",
    "DownloaderConfig",
    "DownloadOptions",
    # Models
    "FileDescriptor",
    "DriveDescriptor",
    "FolderPath",
    "Selector",
    "ById",
    "ByExactName",
    "ByNameContains",
    "ByRegex",
    # Errors
    "GDriveDlError",
    "AuthError",
    "InvalidInputError",
    "NotFoundError",
    "AmbiguousPathError",
    "IOFailureError",
    "PermissionError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
