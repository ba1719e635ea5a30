"""Sync orchestration: resolve, locate, scan, then upload, link and commit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from mediasync.exceptions import AlbumLookupError, SyncAbortedError
from mediasync.services.album_service import add_assets_to_album, find_album_id
from mediasync.services.endpoint_service import resolve_base_url
from mediasync.services.ledger_service import UploadLedger
from mediasync.services.scan_service import scan_local_files
from mediasync.services.upload_service import is_synced, linkable_asset_id, upload_asset

if TYPE_CHECKING:
    from pathlib import Path

    from mediasync.config import Settings
    from mediasync.services.scan_service import LocalFile

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Counters and abort reason for one run."""

    processed: int = 0
    failed: int = 0
    skipped: int = 0
    link_failures: int = 0
    aborted: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.aborted is None


class SyncContext:
    """Everything a run needs: settings, credential and the HTTP client."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        self.settings = settings
        self.client = client or httpx.Client(timeout=settings.request_timeout)

    @property
    def api_key(self) -> str:
        return self.settings.immich_api_key

    @property
    def source_dir(self) -> Path:
        return self.settings.source_dir

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> SyncContext:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _resolve_endpoint(ctx: SyncContext) -> str:
    base_url = resolve_base_url(
        ctx.client,
        ctx.settings.immich_local_url,
        ctx.settings.immich_external_url,
        probe_timeout=ctx.settings.probe_timeout,
    )
    if base_url is None:
        msg = "Could not connect to any server."
        raise SyncAbortedError(msg)
    return base_url


def _locate_album(ctx: SyncContext, base_url: str) -> str:
    album_name = ctx.settings.immich_album_name
    logger.info("Looking for album: '%s'...", album_name)
    try:
        album_id = find_album_id(ctx.client, base_url, ctx.api_key, album_name)
    except AlbumLookupError as exc:
        raise SyncAbortedError(str(exc)) from exc
    if album_id is None:
        msg = f"Album '{album_name}' not found on server!"
        raise SyncAbortedError(msg)
    return album_id


def _scan(ctx: SyncContext) -> list[LocalFile]:
    try:
        return scan_local_files(ctx.source_dir)
    except OSError as exc:
        raise SyncAbortedError(str(exc)) from exc


def plan_sync(ctx: SyncContext) -> list[LocalFile]:
    """Return the files a sync run would try to upload, without network access."""
    ledger = UploadLedger.load(ctx.settings.history_file)
    return [f for f in _scan(ctx) if f.filename not in ledger]


def _commit(ledger: UploadLedger, filename: str) -> None:
    try:
        ledger.record(filename)
    except OSError as exc:
        msg = f"Failed to save upload history {ledger.path}: {exc}"
        raise SyncAbortedError(msg) from exc


def _sync_file(
    ctx: SyncContext,
    base_url: str,
    album_id: str,
    ledger: UploadLedger,
    local_file: LocalFile,
    report: SyncReport,
) -> None:
    filename = local_file.filename
    logger.info("Uploading: %s...", filename)
    outcome = upload_asset(ctx.client, base_url, ctx.api_key, local_file)

    if not is_synced(outcome):
        report.failed += 1
        return

    asset_id = linkable_asset_id(outcome)
    if asset_id is not None:
        try:
            add_assets_to_album(ctx.client, base_url, ctx.api_key, album_id, [asset_id])
        except httpx.HTTPError as exc:
            logger.error("Failed to link %s to album: %s", filename, exc)
            report.link_failures += 1
    else:
        logger.info("   -- Asset id unknown, not linking %s", filename)

    _commit(ledger, filename)
    report.processed += 1


def _run(ctx: SyncContext, report: SyncReport) -> None:
    base_url = _resolve_endpoint(ctx)
    album_id = _locate_album(ctx, base_url)
    ledger = UploadLedger.load(ctx.settings.history_file)
    files = _scan(ctx)

    for local_file in files:
        if local_file.filename in ledger:
            report.skipped += 1
            continue
        _sync_file(ctx, base_url, album_id, ledger, local_file, report)


def run_sync(ctx: SyncContext) -> SyncReport:
    """Run one sync pass and return its report.

    Run-fatal conditions end the pass early and are reported through
    ``SyncReport.aborted``; they are logged, never raised.
    """
    report = SyncReport()
    try:
        _run(ctx, report)
    except SyncAbortedError as exc:
        logger.error("%s", exc)
        report.aborted = str(exc)

    if report.processed > 0:
        logger.info("Done! Processed %d images.", report.processed)
    elif report.aborted is None:
        logger.info("No new images found.")
    return report
