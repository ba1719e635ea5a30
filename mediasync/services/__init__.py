"""Sync services: ledger, scanning, endpoint resolution, albums, uploads."""
