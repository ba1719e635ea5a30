"""CLI for mediasync one-way image upload."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from mediasync.config import Settings
from mediasync.exceptions import SyncAbortedError
from mediasync.services.sync_service import SyncContext, plan_sync, run_sync

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _configure_logging(debug: bool, log_file: str = "") -> None:
    """Configure logging to stdout and, when set, to *log_file*."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediasync",
        description="Upload new local images to an Immich server album",
    )
    parser.add_argument("--dir", "-d", help="Source directory (default: SCREENSHOTS_PATH)")
    parser.add_argument("--album", "-a", help="Target album name (default: IMMICH_ALBUM_NAME)")
    parser.add_argument("--local-url", help="Preferred server URL, probed first")
    parser.add_argument("--external-url", help="Fallback server URL")
    parser.add_argument("--api-key", help="API key (default: IMMICH_API_KEY)")
    parser.add_argument("--history-file", help="Upload history file")
    parser.add_argument("--log-file", help="Log file (empty string disables file logging)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("sync", help="Upload new images (default)")
    subparsers.add_parser("status", help="List images that would be uploaded")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, overridden by explicit flags."""
    overrides: dict[str, Any] = {}
    if args.dir is not None:
        overrides["screenshots_path"] = args.dir
    if args.album is not None:
        overrides["immich_album_name"] = args.album
    if args.local_url is not None:
        overrides["immich_local_url"] = args.local_url
    if args.external_url is not None:
        overrides["immich_external_url"] = args.external_url
    if args.api_key is not None:
        overrides["immich_api_key"] = args.api_key
    if args.history_file is not None:
        overrides["history_file"] = Path(args.history_file)
    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["debug"] = True
    return Settings(**overrides)


def _print_status(ctx: SyncContext) -> None:
    try:
        pending = plan_sync(ctx)
    except SyncAbortedError as exc:
        print(f"Error: {exc}")
        return
    print("Sync Status:")
    print(f"  To upload: {len(pending)}")
    for local_file in pending:
        print(f"    + {local_file.filename}")


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if args.command == "status":
        if not settings.screenshots_path.strip():
            print("Error: SCREENSHOTS_PATH not set")
            sys.exit(1)
        _configure_logging(settings.debug)
        with SyncContext(settings) as ctx:
            _print_status(ctx)
        return

    try:
        settings.validate_required()
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    _configure_logging(settings.debug, settings.log_file)
    with SyncContext(settings) as ctx:
        report = run_sync(ctx)
    logger.debug(
        "Run finished: processed=%d failed=%d skipped=%d link_failures=%d",
        report.processed,
        report.failed,
        report.skipped,
        report.link_failures,
    )


if __name__ == "__main__":
    main()
