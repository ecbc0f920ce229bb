"""GoogleDriveDownloader: locate one Drive file and save it locally."""

from __future__ import annotations

import logging
import os
from typing import IO, Optional, Union

from gdrivedl.auth import ServiceAccountClient
from gdrivedl.cache import ResolutionCache
from gdrivedl.config import DownloaderConfig, DownloadOptions
from gdrivedl.controller import GoogleDriveController
from gdrivedl.fetcher import FileFetcher
from gdrivedl.locator import FileLocator
from gdrivedl.models import (
    ByExactName,
    ById,
    ByNameContains,
    ByRegex,
    FileDescriptor,
    FolderPath,
    Selector,
)

PathLike = Union[str, "os.PathLike[str]"]


class GoogleDriveDownloader:
    """
    High-level downloader for a service account with read-only Drive access.

    Every public download returns the saved file name. Lookups by name,
    substring or regex without a folder path copy raw bytes; the folder-path
    variants and download_smart export Google Docs/Sheets/Slides.
    """

    def __init__(
        self,
        credential_stream: IO[Union[str, bytes]],
        *,
        config: Optional[DownloaderConfig] = None,
        logger: Optional[logging.Logger] = None,
        cache: Optional[ResolutionCache] = None,
    ) -> None:
        """
        Raises:
            AuthError: if the credential cannot be parsed or the Drive client
                cannot be built.
        """
        cfg = config or DownloaderConfig()
        client = ServiceAccountClient.from_stream(credential_stream)
        controller = GoogleDriveController(client, config=cfg, logger=logger)
        self._setup(controller, cfg, logger, cache)

    @classmethod
    def from_file(
        cls,
        path: PathLike,
        *,
        config: Optional[DownloaderConfig] = None,
        logger: Optional[logging.Logger] = None,
        cache: Optional[ResolutionCache] = None,
    ) -> GoogleDriveDownloader:
        cfg = config or DownloaderConfig()
        client = ServiceAccountClient.from_file(os.fspath(path))
        controller = GoogleDriveController(client, config=cfg, logger=logger)
        return cls.from_controller(controller, logger=logger, cache=cache)

    @classmethod
    def from_controller(
        cls,
        controller: GoogleDriveController,
        *,
        logger: Optional[logging.Logger] = None,
        cache: Optional[ResolutionCache] = None,
    ) -> GoogleDriveDownloader:
        """
        Create downloader with an injected controller (useful for tests).

        The controller keeps its own logger; pass `logger` to the controller
        too if its listing and transfer events should reach the same place.
        """
        obj = cls.__new__(cls)
        cfg = getattr(controller, "config", None) or DownloaderConfig()
        obj._setup(controller, cfg, logger, cache)
        return obj

    def _setup(
        self,
        controller: GoogleDriveController,
        config: DownloaderConfig,
        logger: Optional[logging.Logger],
        cache: Optional[ResolutionCache],
    ) -> None:
        if cache is None and config.cache_ttl_sec is not None:
            cache = ResolutionCache(config.cache_ttl_sec)
        self._controller = controller
        self._config = config
        self._cache = cache
        self._log = logger or logging.getLogger(__name__)
        self._locator = FileLocator(controller, cache=cache, logger=logger)
        self._fetcher = FileFetcher(controller, logger=logger)

    @property
    def config(self) -> DownloaderConfig:
        return self._config

    # ----------------------------
    # Raw downloads
    # ----------------------------
    def download_by_id(self, file_id: str, output_dir: PathLike) -> str:
        """Download `file_id` as-is (no export) and return its name."""
        return self._fetcher.fetch_raw(file_id, output_dir)

    def download_by_name(self, name: str, output_dir: PathLike) -> str:
        """Download the first file whose name equals `name`."""
        found = self._locator.resolve(ByExactName(name))
        return self._fetcher.fetch_raw(found.file_id, output_dir)

    def download_by_name_contains(self, partial: str, output_dir: PathLike) -> str:
        """Download the first listed file whose name contains `partial`."""
        found = self._locator.resolve(ByNameContains(partial))
        return self._fetcher.fetch_raw(found.file_id, output_dir)

    def download_by_regex(self, pattern: str, output_dir: PathLike) -> str:
        """Download the first listed file whose whole name matches `pattern`."""
        found = self._locator.resolve(ByRegex(pattern))
        return self._fetcher.fetch_raw(found.file_id, output_dir)

    # ----------------------------
    # Folder-scoped / smart downloads
    # ----------------------------
    def download_by_name_contains_in_folder_path(
        self,
        folder_path: Union[FolderPath, str],
        partial: str,
        output_dir: PathLike,
        options: Optional[DownloadOptions] = None,
    ) -> str:
        """
        Download the first file containing `partial` directly inside
        `folder_path` ("SharedDrive/Folder/Sub"), exporting Google types.
        """
        return self.download(
            ByNameContains(partial),
            output_dir,
            folder_path=folder_path,
            options=options,
        )

    def download_by_regex_in_folder_path(
        self,
        folder_path: Union[FolderPath, str],
        regex: str,
        output_dir: PathLike,
        options: Optional[DownloadOptions] = None,
    ) -> str:
        return self.download(
            ByRegex(regex),
            output_dir,
            folder_path=folder_path,
            options=options,
        )

    def download_smart(
        self,
        file_id: str,
        output_dir: PathLike,
        options: Optional[DownloadOptions] = None,
    ) -> str:
        """Download `file_id`, exporting Google Docs/Sheets/Slides."""
        return self._fetcher.fetch(FileDescriptor(file_id=file_id, name=""), output_dir, options)

    # ----------------------------
    # Generic API
    # ----------------------------
    def resolve(
        self,
        selector: Selector,
        folder_path: Union[FolderPath, str, None] = None,
    ) -> FileDescriptor:
        return self._locator.resolve(selector, folder_path)

    def download(
        self,
        selector: Selector,
        output_dir: PathLike,
        *,
        folder_path: Union[FolderPath, str, None] = None,
        options: Optional[DownloadOptions] = None,
    ) -> str:
        """
        Resolve `selector` and save the file.

        Folder-scoped lookups and id lookups go through the exporting fetch;
        root-scoped name lookups copy raw bytes.
        """
        if folder_path is None and isinstance(selector, ById):
            return self.download_smart(selector.file_id, output_dir, options)

        found = self._locator.resolve(selector, folder_path)
        self._log.info("Matched %s (%s)", found.name, found.file_id)
        if folder_path is None:
            return self._fetcher.fetch_raw(found.file_id, output_dir)
        return self._fetcher.fetch(found, output_dir, options)

    def clear_cache(self) -> None:
        """Drop cached shared-drive and folder ids."""
        if self._cache is not None:
            self._cache.clear()
