"""Local scanning: find image files and read their size and timestamps."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mediasync.services.datetime_service import from_timestamp

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp"})


@dataclass(frozen=True)
class LocalFile:
    """A candidate file with the metadata sent alongside its bytes."""

    path: Path
    filename: str
    size: int
    created_at: datetime
    modified_at: datetime


def is_image_file(filename: str) -> bool:
    """Return True when the extension is in the image allow-list (any case)."""
    _, dot, ext = filename.rpartition(".")
    return bool(dot) and ext.lower() in IMAGE_EXTENSIONS


def _created_timestamp(stat: os.stat_result) -> float:
    # st_birthtime is missing on most Linux filesystems
    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime is None:
        return stat.st_mtime
    return float(birthtime)


def read_local_file(path: Path) -> LocalFile:
    """Build a ``LocalFile`` from the file system metadata of *path*."""
    stat = path.stat()
    return LocalFile(
        path=path,
        filename=path.name,
        size=stat.st_size,
        created_at=from_timestamp(_created_timestamp(stat)),
        modified_at=from_timestamp(stat.st_mtime),
    )


def scan_local_files(source_dir: Path) -> list[LocalFile]:
    """Return eligible image files in *source_dir*, oldest-modified first.

    Only the top level of the directory is scanned. Entries whose metadata
    cannot be read are skipped with a warning. Ties on modification time are
    broken by filename so the order is reproducible.

    Raises ``FileNotFoundError``/``NotADirectoryError``/``OSError`` when the
    directory itself cannot be listed.
    """
    if not source_dir.exists():
        msg = f"Source folder not found: {source_dir}"
        raise FileNotFoundError(msg)
    if not source_dir.is_dir():
        msg = f"Source path is not a directory: {source_dir}"
        raise NotADirectoryError(msg)

    files: list[LocalFile] = []
    for entry in source_dir.iterdir():
        if not is_image_file(entry.name):
            continue
        try:
            if not entry.is_file():
                continue
            files.append(read_local_file(entry))
        except OSError as exc:
            logger.warning("Skipping %s: cannot read metadata (%s)", entry, exc)

    files.sort(key=lambda f: f.filename)
    files.sort(key=lambda f: f.modified_at)
    return files
