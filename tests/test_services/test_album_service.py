"""Tests for album lookup and linking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from mediasync.exceptions import AlbumLookupError
from mediasync.services.album_service import add_assets_to_album, find_album_id

if TYPE_CHECKING:
    from tests.fake_server import FakeImmichServer

BASE = "http://immich.local:2283"
KEY = "test-api-key"


class TestFindAlbumId:
    def test_exact_match(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        fake_server.albums = [
            {"id": "1", "albumName": "Screenshots 2024"},
            {"id": "2", "albumName": "Screenshots"},
        ]
        assert find_album_id(http_client, BASE, KEY, "Screenshots") == "2"

    def test_match_is_case_sensitive(
        self, http_client: httpx.Client, fake_server: FakeImmichServer
    ) -> None:
        fake_server.albums = [{"id": "1", "albumName": "screenshots"}]
        assert find_album_id(http_client, BASE, KEY, "Screenshots") is None

    def test_first_duplicate_wins(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        fake_server.albums = [
            {"id": "first", "albumName": "Screenshots"},
            {"id": "second", "albumName": "Screenshots"},
        ]
        assert find_album_id(http_client, BASE, KEY, "Screenshots") == "first"

    def test_not_found(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        fake_server.albums = []
        assert find_album_id(http_client, BASE, KEY, "Screenshots") is None

    def test_extra_fields_are_ignored(
        self, http_client: httpx.Client, fake_server: FakeImmichServer
    ) -> None:
        fake_server.albums = [{"id": "9", "albumName": "Screenshots", "assetCount": 12, "shared": False}]
        assert find_album_id(http_client, BASE, KEY, "Screenshots") == "9"

    def test_unauthorized_raises(self, http_client: httpx.Client) -> None:
        with pytest.raises(AlbumLookupError, match="Error fetching albums"):
            find_album_id(http_client, BASE, "wrong-key", "Screenshots")

    def test_server_error_raises(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        fake_server.album_status = 500
        with pytest.raises(AlbumLookupError):
            find_album_id(http_client, BASE, KEY, "Screenshots")

    def test_transport_error_raises(
        self, http_client: httpx.Client, fake_server: FakeImmichServer
    ) -> None:
        fake_server.unreachable_hosts.add("immich.local")
        with pytest.raises(AlbumLookupError):
            find_album_id(http_client, BASE, KEY, "Screenshots")

    def test_malformed_listing_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"albums": []}))
        with httpx.Client(transport=transport) as client, pytest.raises(AlbumLookupError):
            find_album_id(client, BASE, KEY, "Screenshots")


class TestAddAssetsToAlbum:
    def test_sends_ids(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        add_assets_to_album(http_client, BASE, KEY, "album-1", ["asset-a"])
        assert fake_server.links == [("album-1", ["asset-a"])]

    def test_error_status_raises(self, http_client: httpx.Client, fake_server: FakeImmichServer) -> None:
        fake_server.link_status = 400
        with pytest.raises(httpx.HTTPStatusError):
            add_assets_to_album(http_client, BASE, KEY, "album-1", ["asset-a"])
