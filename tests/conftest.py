"""Shared test fixtures for mediasync."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from mediasync.config import Settings
from mediasync.services.sync_service import SyncContext
from tests.fake_server import FakeImmichServer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

TEST_API_KEY = "test-api-key"
TEST_ALBUM = "Screenshots"
LOCAL_URL = "http://immich.local:2283"
EXTERNAL_URL = "https://photos.example.com"


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "screenshots"
    path.mkdir()
    return path


@pytest.fixture
def make_image(source_dir: Path) -> Callable[..., Path]:
    """Create an image file with an explicit modification time."""

    def _make(name: str, mtime: float, content: bytes = b"\x89PNG fake") -> Path:
        path = source_dir / name
        path.write_bytes(content)
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def test_settings(tmp_path: Path, source_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        screenshots_path=str(source_dir),
        immich_api_key=TEST_API_KEY,
        immich_album_name=TEST_ALBUM,
        immich_local_url=LOCAL_URL,
        immich_external_url=EXTERNAL_URL,
        history_file=tmp_path / "state" / "history.json",
        log_file="",
    )


@pytest.fixture
def fake_server() -> FakeImmichServer:
    return FakeImmichServer(api_key=TEST_API_KEY, albums=[{"id": "album-1", "albumName": TEST_ALBUM}])


@pytest.fixture
def http_client(fake_server: FakeImmichServer) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(fake_server.handle))
    yield client
    client.close()


@pytest.fixture
def sync_context(test_settings: Settings, http_client: httpx.Client) -> Iterator[SyncContext]:
    with SyncContext(test_settings, client=http_client) as ctx:
        yield ctx
