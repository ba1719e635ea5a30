"""Upload ledger: the persisted set of filenames that were already synced."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


def load_history(path: Path) -> set[str]:
    """Load the list of synced filenames from *path*.

    A missing file means nothing was synced yet. A file that cannot be read or
    does not hold a JSON list of strings is treated the same way, with a
    warning, so a damaged history never blocks a run.
    """
    if not path.exists():
        return set()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read upload history %s (%s); starting empty", path, exc)
        return set()
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        logger.warning("Upload history %s is not a list of filenames; starting empty", path)
        return set()
    return set(data)


def save_history(path: Path, names: Iterable[str]) -> None:
    """Atomically rewrite *path* with the sorted list of filenames.

    The list is written to a temporary file in the same directory and moved
    into place with ``os.replace``, so readers only ever see a complete file.
    """
    payload = json.dumps(sorted(names), indent=2)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class UploadLedger:
    """In-memory view of the upload history that persists on every change."""

    def __init__(self, path: Path, names: Iterable[str] = ()) -> None:
        self.path = path
        self._names: set[str] = set(names)

    @classmethod
    def load(cls, path: Path) -> UploadLedger:
        """Load the ledger stored at *path* (empty when absent)."""
        ledger = cls(path, load_history(path))
        logger.debug("Loaded %d synced filenames from %s", len(ledger), path)
        return ledger

    def __contains__(self, filename: object) -> bool:
        return filename in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    @property
    def names(self) -> frozenset[str]:
        """Snapshot of the recorded filenames."""
        return frozenset(self._names)

    def record(self, filename: str) -> None:
        """Add *filename* and persist the ledger immediately.

        Raises ``OSError`` when the ledger file cannot be written.
        """
        if filename in self._names:
            return
        self._names.add(filename)
        save_history(self.path, self._names)
