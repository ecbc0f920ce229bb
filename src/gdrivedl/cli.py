"""Command-line entry point: download one Drive file with a service account."""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from typing import Optional, Sequence

from gdrivedl.config import DownloaderConfig, DownloadOptions
from gdrivedl.downloader import GoogleDriveDownloader
from gdrivedl.models import ByExactName, ById, ByNameContains, ByRegex, Selector

_SELECTORS = {
    "id": ById,
    "name": ByExactName,
    "contains": ByNameContains,
    "regex": ByRegex,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdrivedl",
        description="Download a file from Google Drive using a service account.",
    )
    parser.add_argument("credentials", help="path to the service account JSON key")
    parser.add_argument(
        "selector",
        help="file id (default), or a name/substring/regex depending on --by",
    )
    parser.add_argument("output_dir", help="directory to save the downloaded file")
    parser.add_argument(
        "--by",
        choices=sorted(_SELECTORS),
        default="id",
        help="how SELECTOR identifies the file (default: id)",
    )
    parser.add_argument(
        "--folder-path",
        metavar="DRIVE/FOLDER[/...]",
        help="search only inside this shared-drive folder",
    )
    parser.add_argument(
        "--acknowledge-abuse",
        action="store_true",
        help="download files Drive has flagged as abusive",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SEC",
        help="HTTP timeout in seconds (default: 300)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args: argparse.Namespace, downloader: GoogleDriveDownloader) -> str:
    selector: Selector = _SELECTORS[args.by](args.selector)
    options = DownloadOptions(acknowledge_abuse=args.acknowledge_abuse)

    if args.folder_path:
        return downloader.download(
            selector,
            args.output_dir,
            folder_path=args.folder_path,
            options=options,
        )
    if isinstance(selector, ById):
        return downloader.download_by_id(selector.file_id, args.output_dir)
    return downloader.download(selector, args.output_dir, options=options)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = DownloaderConfig.from_env()
        if args.timeout is not None:
            config = config.with_overrides(timeout_sec=args.timeout)
        downloader = GoogleDriveDownloader.from_file(args.credentials, config=config)
        name = run(args, downloader)
    except Exception as exc:
        print(f"Failed to download file: {exc}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 1

    print(f"Downloaded file: {name}")
    return 0
