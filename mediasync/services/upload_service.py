"""Asset upload and classification of the server's answer.

The server signals duplicates in two ways. ``200 OK`` means it recognised the
asset and returned the existing record. ``409 Conflict`` means it refused the
upload because the asset already exists; the body may or may not carry the
existing id. Both count as synced so the file is never uploaded again, but
only outcomes with a known id can be linked into an album.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from mediasync.schemas.asset import AssetResponse
from mediasync.services.album_service import API_KEY_HEADER
from mediasync.services.datetime_service import epoch_seconds, format_iso

if TYPE_CHECKING:
    from mediasync.services.scan_service import LocalFile

logger = logging.getLogger(__name__)

DEVICE_ID = "mediasync-uploader-v1"
_DETAIL_LIMIT = 500


@dataclass(frozen=True)
class Created:
    """The server stored a new asset."""

    asset_id: str


@dataclass(frozen=True)
class Deduplicated:
    """The server already had the asset and returned it."""

    asset_id: str


@dataclass(frozen=True)
class RejectedDuplicate:
    """The server rejected the upload as a duplicate; the id may be unknown."""

    asset_id: str | None = None


@dataclass(frozen=True)
class Failed:
    """The upload did not succeed; the file stays eligible for the next run."""

    status_code: int | None = None
    detail: str = ""


UploadOutcome = Created | Deduplicated | RejectedDuplicate | Failed


def is_synced(outcome: UploadOutcome) -> bool:
    """Return True when the file must be recorded as synced."""
    return not isinstance(outcome, Failed)


def linkable_asset_id(outcome: UploadOutcome) -> str | None:
    """Return the asset id to link into the album, if one is known."""
    if isinstance(outcome, Created | Deduplicated | RejectedDuplicate):
        return outcome.asset_id
    return None


def device_asset_id(local_file: LocalFile) -> str:
    """Device-scoped id derived from filename, size and modification time."""
    return f"{local_file.filename}-{local_file.size}-{epoch_seconds(local_file.modified_at)}"


def build_upload_fields(local_file: LocalFile) -> dict[str, str]:
    """Build the text fields sent alongside the file bytes."""
    return {
        "deviceAssetId": device_asset_id(local_file),
        "deviceId": DEVICE_ID,
        "fileCreatedAt": format_iso(local_file.created_at),
        "fileModifiedAt": format_iso(local_file.modified_at),
        "isFavorite": "false",
    }


def guess_mime_type(filename: str) -> str:
    """Guess the MIME type from the filename, defaulting to octet-stream."""
    mime, _ = mimetypes.guess_type(filename)
    return mime or "application/octet-stream"


def _parse_asset_id(resp: httpx.Response) -> str | None:
    if not resp.content:
        return None
    try:
        return AssetResponse.model_validate_json(resp.content).id
    except ValidationError:
        return None


def classify_response(resp: httpx.Response, filename: str) -> UploadOutcome:
    """Map the upload response status (and body) to an ``UploadOutcome``."""
    status = resp.status_code

    if status == httpx.codes.CREATED:
        asset_id = _parse_asset_id(resp)
        if asset_id is None:
            logger.error("Upload error for %s: created response without asset id", filename)
            return Failed(status, "missing asset id")
        return Created(asset_id)

    if status == httpx.codes.OK:
        logger.warning("File exists (Deduplicated): %s", filename)
        asset_id = _parse_asset_id(resp)
        if asset_id is None:
            logger.error("Upload error for %s: ok response without asset id", filename)
            return Failed(status, "missing asset id")
        return Deduplicated(asset_id)

    if status == httpx.codes.CONFLICT:
        logger.warning("Duplicate rejected: %s", filename)
        return RejectedDuplicate(_parse_asset_id(resp))

    detail = resp.text[:_DETAIL_LIMIT]
    logger.error("Upload failed for %s: Status %d - %s", filename, status, detail)
    return Failed(status, detail)


def upload_asset(
    client: httpx.Client, base_url: str, api_key: str, local_file: LocalFile
) -> UploadOutcome:
    """Upload one file and classify the result.

    Never raises for per-file problems: read errors and transport errors are
    logged and returned as ``Failed``.
    """
    filename = local_file.filename
    try:
        content = local_file.path.read_bytes()
    except OSError as exc:
        logger.error("Upload error for %s: cannot read file (%s)", filename, exc)
        return Failed(None, str(exc))

    files = {"assetData": (filename, content, guess_mime_type(filename))}
    try:
        resp = client.post(
            f"{base_url}/api/assets",
            headers={API_KEY_HEADER: api_key},
            data=build_upload_fields(local_file),
            files=files,
        )
    except httpx.HTTPError as exc:
        logger.error("Upload error for %s: %s", filename, exc)
        return Failed(None, str(exc))

    return classify_response(resp, filename)
