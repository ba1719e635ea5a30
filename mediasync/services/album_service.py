"""Album lookup and linking against the server's album endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from mediasync.exceptions import AlbumLookupError
from mediasync.schemas.asset import Album, AlbumAssetsRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

_ALBUM_LIST = TypeAdapter(list[Album])


def list_albums(client: httpx.Client, base_url: str, api_key: str) -> list[Album]:
    """Fetch every album visible to the credential.

    Raises ``AlbumLookupError`` on transport errors, error statuses, or an
    unexpected response body.
    """
    try:
        resp = client.get(f"{base_url}/api/albums", headers={API_KEY_HEADER: api_key})
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        msg = f"Error fetching albums: {exc}"
        raise AlbumLookupError(msg) from exc

    try:
        return _ALBUM_LIST.validate_json(resp.content)
    except ValidationError as exc:
        msg = f"Unexpected album listing from {base_url}: {exc.error_count()} validation error(s)"
        raise AlbumLookupError(msg) from exc


def find_album_id(client: httpx.Client, base_url: str, api_key: str, album_name: str) -> str | None:
    """Return the id of the first album named exactly *album_name*, or None.

    When the server holds several albums with that name, the first one in the
    listing wins; the server does not guarantee any particular order.
    """
    for album in list_albums(client, base_url, api_key):
        if album.album_name == album_name:
            return album.id
    return None


def add_assets_to_album(
    client: httpx.Client,
    base_url: str,
    api_key: str,
    album_id: str,
    asset_ids: Sequence[str],
) -> None:
    """Link *asset_ids* into the album. Raises ``httpx.HTTPError`` on failure."""
    body = AlbumAssetsRequest(ids=list(asset_ids))
    resp = client.put(
        f"{base_url}/api/albums/{album_id}/assets",
        headers={API_KEY_HEADER: api_key},
        json=body.model_dump(),
    )
    resp.raise_for_status()
    logger.info("   -- Added to album")
