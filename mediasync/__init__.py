"""mediasync: one-way, idempotent image upload client for Immich-compatible servers."""

__version__ = "0.1.0"
