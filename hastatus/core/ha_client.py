"""Home Assistant REST client producing render-ready entity records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Optional
from urllib.parse import quote

import httpx

from ..render.models import EntityRecord
from .http_client import build_timeout, get_shared_client, record_client_error, record_client_success

logger = logging.getLogger(__name__)

HA_CLIENT_ID = "homeassistant"


class HomeAssistantClient:
    """Fetch entity states from the Home Assistant REST API.

    Every failure (transport error, timeout, non-2xx status, malformed body)
    turns into an Unavailable record so a render always has something to
    draw. Calls are never retried.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Home Assistant base URL, e.g. http://homeassistant.local:8123
            token: Long-lived access token
            timeout: Per-request timeout in seconds
            client: Explicit httpx client; the shared pooled client when None
        """
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = build_timeout(timeout)
        self._client = client

    def state_url(self, entity_id: str) -> str:
        return f"{self.base_url}/api/states/{quote(entity_id, safe='.')}"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await get_shared_client(HA_CLIENT_ID, timeout=self._timeout)

    async def fetch_entity(self, entity_id: str) -> EntityRecord:
        """Fetch one entity's state.

        Args:
            entity_id: Entity id such as sensor.living_room_temperature

        Returns:
            EntityRecord for the entity, or EntityRecord.unavailable(entity_id)
            when the state could not be fetched
        """
        url = self.state_url(entity_id)
        client = await self._get_client()

        try:
            response = await client.get(url, headers=self._headers, timeout=self._timeout)
        except httpx.TimeoutException:
            logger.warning("Timed out fetching %s from Home Assistant", entity_id)
            await record_client_error(HA_CLIENT_ID)
            return EntityRecord.unavailable(entity_id)
        except httpx.HTTPError as e:
            logger.warning("HTTP error fetching %s from Home Assistant: %s", entity_id, e)
            await record_client_error(HA_CLIENT_ID)
            return EntityRecord.unavailable(entity_id)

        if not response.is_success:
            logger.warning(
                "Home Assistant returned HTTP %d for %s", response.status_code, entity_id
            )
            return EntityRecord.unavailable(entity_id)

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Home Assistant returned invalid JSON for %s", entity_id)
            return EntityRecord.unavailable(entity_id)

        if not isinstance(payload, dict):
            logger.warning("Unexpected state payload type for %s: %s", entity_id, type(payload).__name__)
            return EntityRecord.unavailable(entity_id)

        try:
            record = EntityRecord.from_state_json(payload)
        except ValueError as e:
            logger.warning("Malformed state payload for %s: %s", entity_id, e)
            return EntityRecord.unavailable(entity_id)

        await record_client_success(HA_CLIENT_ID)
        logger.debug("Fetched %s state=%r", entity_id, record.raw_state)
        return record

    async def fetch_entities(self, entity_ids: Iterable[str]) -> list[EntityRecord]:
        """Fetch several entities concurrently, preserving input order."""
        ids = list(entity_ids)
        records = await asyncio.gather(*(self.fetch_entity(entity_id) for entity_id in ids))
        unavailable = sum(1 for record in records if record.is_unavailable_sentinel)
        if unavailable:
            logger.info("Fetched %d entities, %d unavailable", len(ids), unavailable)
        return list(records)
