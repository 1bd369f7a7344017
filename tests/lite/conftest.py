from collections.abc import AsyncIterator, Generator
from typing import Any, Callable, Optional

import httpx
import pytest
import pytest_asyncio

from hastatus.config_loader import Config
from hastatus.core.http_client import close_all_clients
from hastatus.render import EntityRecord

_ENV_VARS = (
    "HA_URL",
    "HA_TOKEN",
    "PORT",
    "HASTATUS_SERVER_BIND",
    "HASTATUS_SERVER_PORT",
    "HASTATUS_REQUEST_TIMEOUT",
    "HASTATUS_CACHE_MAX_AGE",
    "HASTATUS_FONT_PATH",
    "HASTATUS_LOG_LEVEL",
    "HASTATUS_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any, tmp_path: Any) -> Generator[None, Any, None]:
    """Run every test without hastatus env vars and outside any .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest_asyncio.fixture
async def cleanup_shared_http_clients() -> AsyncIterator[None]:
    """Close shared httpx clients before and after a test to prevent leaks."""
    await close_all_clients()
    yield
    await close_all_clients()


@pytest.fixture
def test_config() -> Config:
    """Deterministic configuration used by server tests."""
    return Config(ha_url="http://ha.test:8123", ha_token="test-token", cache_max_age=120)


@pytest.fixture
def ha_states() -> dict[str, dict[str, Any]]:
    """Home Assistant /api/states payloads keyed by entity id."""
    return {
        "sensor.temperature": {
            "entity_id": "sensor.temperature",
            "state": "21.7",
            "attributes": {"unit_of_measurement": "°C", "device_class": "temperature"},
        },
        "sensor.humidity": {
            "entity_id": "sensor.humidity",
            "state": "45",
            "attributes": {"unit_of_measurement": "%", "friendly_name": "Humidity"},
        },
        "binary_sensor.front_door": {
            "entity_id": "binary_sensor.front_door",
            "state": "on",
            "attributes": {"friendly_name": "Front Door", "device_class": "door"},
        },
    }


@pytest.fixture
def mock_transport_factory(
    ha_states: dict[str, dict[str, Any]],
) -> Callable[..., httpx.MockTransport]:
    """Build an httpx.MockTransport serving ha_states and recording requests.

    Unknown entities get a 404, like Home Assistant itself.
    """

    def _factory(
        requests: Optional[list[httpx.Request]] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> httpx.MockTransport:
        def _default_handler(request: httpx.Request) -> httpx.Response:
            entity_id = request.url.path.rsplit("/", 1)[-1]
            payload = ha_states.get(entity_id)
            if payload is None:
                return httpx.Response(404, json={"message": "Entity not found."})
            return httpx.Response(200, json=payload)

        def _recording(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            return (handler or _default_handler)(request)

        return httpx.MockTransport(_recording)

    return _factory


class FakeHomeAssistantClient:
    """In-memory stand-in for HomeAssistantClient used by route tests."""

    def __init__(self, records: dict[str, EntityRecord]) -> None:
        self.records = records
        self.fetched: list[str] = []

    async def fetch_entity(self, entity_id: str) -> EntityRecord:
        self.fetched.append(entity_id)
        return self.records.get(entity_id) or EntityRecord.unavailable(entity_id)

    async def fetch_entities(self, entity_ids: Any) -> list[EntityRecord]:
        return [await self.fetch_entity(entity_id) for entity_id in entity_ids]


@pytest.fixture
def fake_ha_client(ha_states: dict[str, dict[str, Any]]) -> FakeHomeAssistantClient:
    return FakeHomeAssistantClient(
        {entity_id: EntityRecord.from_state_json(payload) for entity_id, payload in ha_states.items()}
    )
