"""Exception types for the sync client.

Convention:
- ``SyncAbortedError``: run-fatal conditions (no endpoint, album missing,
  unreadable source directory, ledger write failure). Raised inside the
  orchestrator and caught by ``run_sync``, which logs the reason and ends the
  run without crashing the process.
- Per-file problems never raise; they are folded into a ``Failed`` upload
  outcome so the loop can continue with the next file.
"""

from __future__ import annotations


class MediaSyncError(Exception):
    """Base class for sync client errors."""


class SyncAbortedError(MediaSyncError):
    """Raised when the current run cannot proceed."""


class AlbumLookupError(MediaSyncError):
    """Raised when the album listing cannot be fetched or parsed."""
