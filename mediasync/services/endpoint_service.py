"""Endpoint resolution: prefer the local server, fall back to the external one."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

PING_PATH = "/api/server/ping"
DEFAULT_PROBE_TIMEOUT = 2.0


def normalize_base_url(url: str) -> str:
    """Strip whitespace and trailing slashes from a candidate URL."""
    return url.strip().rstrip("/")


def is_reachable(client: httpx.Client, base_url: str, timeout: float) -> bool:
    """Return True when *base_url* answers the ping probe at all.

    Any HTTP response counts, whatever its status; only transport failures
    (connection refused, DNS errors, timeouts) make the server unreachable.
    """
    try:
        client.get(f"{base_url}{PING_PATH}", timeout=timeout)
    except httpx.TransportError as exc:
        logger.info("No response from %s (%s)", base_url, type(exc).__name__)
        return False
    return True


def resolve_base_url(
    client: httpx.Client,
    primary: str,
    fallback: str,
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> str | None:
    """Choose the base URL for this run, or None when neither is usable.

    The primary candidate is probed with a short timeout. The fallback is
    returned without probing whenever the primary is unset or unreachable.
    """
    primary = normalize_base_url(primary)
    fallback = normalize_base_url(fallback)

    if primary:
        logger.info("Checking connection to: %s...", primary)
        if is_reachable(client, primary, probe_timeout):
            logger.info("Local network detected.")
            return primary

    if fallback:
        logger.info("Switching to external URL: %s", fallback)
        return fallback
    return None
