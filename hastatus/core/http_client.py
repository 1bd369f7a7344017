"""Shared HTTP client manager.

One pooled httpx.AsyncClient is reused for every Home Assistant call instead
of creating a client per request. Clients that keep failing are recreated.
"""

import asyncio
import logging
import time
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Global state for shared HTTP clients
_shared_clients: dict[str, httpx.AsyncClient] = {}
_client_health: dict[str, dict[str, float]] = {}
_client_lock = asyncio.Lock()

# A TRMNL request fans out to at most 15 entity fetches.
DEFAULT_LIMITS = httpx.Limits(max_connections=16, max_keepalive_connections=8)

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "User-Agent": "hastatus",
}

# Recreate a client after this many consecutive errors within the window
HEALTH_ERROR_THRESHOLD = 3
HEALTH_TIMEOUT_SECONDS = 300


def build_timeout(seconds: float) -> httpx.Timeout:
    """Timeout applying the same budget to connect, read, write and pool waits."""
    return httpx.Timeout(seconds)


async def get_shared_client(
    client_id: str = "default",
    limits: Optional[httpx.Limits] = None,
    timeout: Optional[httpx.Timeout] = None,
) -> httpx.AsyncClient:
    """Get or create a shared HTTP client with connection pooling.

    Args:
        client_id: Identifier for the client (allows multiple clients if needed)
        limits: Custom connection limits
        timeout: Custom timeout configuration (30 s when omitted)

    Returns:
        Shared httpx.AsyncClient
    """
    async with _client_lock:
        await _recreate_client_if_unhealthy(client_id)

        if client_id not in _shared_clients or _shared_clients[client_id].is_closed:
            effective_limits = limits or DEFAULT_LIMITS
            logger.debug(
                "Creating shared HTTP client '%s' with limits: max_connections=%s, max_keepalive=%s",
                client_id,
                effective_limits.max_connections,
                effective_limits.max_keepalive_connections,
            )
            _shared_clients[client_id] = httpx.AsyncClient(
                limits=effective_limits,
                timeout=timeout or build_timeout(30.0),
                headers=DEFAULT_HEADERS,
            )
            _client_health[client_id] = {
                "error_count": 0,
                "last_error_time": 0,
                "created_time": time.time(),
            }
            logger.info("Created shared HTTP client '%s'", client_id)

        return _shared_clients[client_id]


async def close_all_clients() -> None:
    """Close all shared HTTP clients; called on application shutdown."""
    async with _client_lock:
        for client_id, client in _shared_clients.items():
            try:
                if not client.is_closed:
                    await client.aclose()
                    logger.debug("Closed shared HTTP client '%s'", client_id)
            except Exception as e:
                logger.warning("Error closing shared HTTP client '%s': %s", client_id, e)

        _shared_clients.clear()
        _client_health.clear()
        logger.info("All shared HTTP clients closed")


async def record_client_error(client_id: str = "default") -> None:
    """Record an error for health tracking."""
    async with _client_lock:
        health = _client_health.setdefault(
            client_id, {"error_count": 0, "last_error_time": 0, "created_time": time.time()}
        )
        health["error_count"] += 1
        health["last_error_time"] = time.time()
        logger.debug(
            "Recorded error for client '%s', total errors: %d", client_id, health["error_count"]
        )


async def record_client_success(client_id: str = "default") -> None:
    """Reset the error count after a successful call."""
    async with _client_lock:
        if client_id in _client_health:
            _client_health[client_id]["error_count"] = 0


async def _recreate_client_if_unhealthy(client_id: str) -> None:
    """Drop a client that errored repeatedly so the next call builds a fresh one."""
    health = _client_health.get(client_id)
    if health is None:
        return

    should_recreate = (
        health["error_count"] >= HEALTH_ERROR_THRESHOLD
        and (time.time() - health["last_error_time"]) < HEALTH_TIMEOUT_SECONDS
    )
    if not should_recreate or client_id not in _shared_clients:
        return

    logger.warning(
        "Recreating unhealthy client '%s' after %d consecutive errors",
        client_id,
        health["error_count"],
    )
    old_client = _shared_clients.pop(client_id)
    del _client_health[client_id]
    try:
        if not old_client.is_closed:
            await old_client.aclose()
    except Exception as e:
        logger.warning("Error closing unhealthy client '%s': %s", client_id, e)


def client_health(client_id: str = "default") -> Optional[dict[str, float]]:
    """Snapshot of a client's health counters, or None when unknown."""
    health = _client_health.get(client_id)
    return dict(health) if health is not None else None
