"""Shared test fixtures for the rendering engine and the server."""

from typing import Any, Callable, Optional

import pytest

from hastatus.render import EntityRecord, RenderResources


@pytest.fixture(scope="session")
def resources() -> RenderResources:
    """Font resources built once per session from Pillow's bundled font."""
    return RenderResources.load()


@pytest.fixture
def make_record() -> Callable[..., EntityRecord]:
    """Factory for entity records with optional unit, name and attributes."""

    def _make(
        entity_id: str,
        state: str,
        unit: Optional[str] = None,
        friendly_name: Optional[str] = None,
        **attributes: Any,
    ) -> EntityRecord:
        attrs = dict(attributes)
        if unit is not None:
            attrs["unit_of_measurement"] = unit
        return EntityRecord(
            entity_id=entity_id,
            friendly_name=friendly_name,
            state=state,
            attributes=attrs,
        )

    return _make
