"""Data models for the status rendering engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

AttributeValue = Union[bool, int, float, str]


class EntityAvailability(Enum):
    """Sentinel for entities the upstream had no data for."""

    UNAVAILABLE = "unavailable"


UNAVAILABLE = EntityAvailability.UNAVAILABLE


class StatusCategory(str, Enum):
    """Coarse status classification driving color and pattern selection."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    WARNING = "warning"
    UNAVAILABLE = "unavailable"
    NEUTRAL = "neutral"


class RenderMode(str, Enum):
    """Supported layout modes."""

    SINGLE_STATUS = "single_status"
    MULTI_STATUS = "multi_status"
    FIXED_DISPLAY = "fixed_display"


class EntityRecord(BaseModel):
    """Render-ready view of one Home Assistant entity.

    Records are built fresh for every request and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str = Field(..., description="Entity id in <domain>.<object_id> form")
    friendly_name: Optional[str] = Field(default=None, description="Display name override")
    state: Union[str, EntityAvailability] = Field(default="", description="Raw state or sentinel")
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)

    @classmethod
    def unavailable(cls, entity_id: str) -> EntityRecord:
        """Build the placeholder record used when a fetch produced nothing."""
        return cls(entity_id=entity_id, state=UNAVAILABLE)

    @classmethod
    def from_state_json(cls, payload: dict[str, Any]) -> EntityRecord:
        """Build a record from a Home Assistant ``/api/states/<id>`` body.

        Args:
            payload: Decoded JSON object with entity_id, state and attributes

        Returns:
            EntityRecord with scalar attributes only (lists, dicts and nulls dropped)

        Raises:
            ValueError: If the payload has no entity_id
        """
        entity_id = payload.get("entity_id")
        if not isinstance(entity_id, str) or not entity_id:
            raise ValueError("State payload is missing entity_id")

        raw_attributes = payload.get("attributes") or {}
        attributes: dict[str, AttributeValue] = {}
        if isinstance(raw_attributes, dict):
            for key, value in raw_attributes.items():
                if isinstance(value, (bool, int, float, str)):
                    attributes[str(key)] = value

        friendly_name = attributes.get("friendly_name")
        state = payload.get("state")

        return cls(
            entity_id=entity_id,
            friendly_name=friendly_name if isinstance(friendly_name, str) else None,
            state="" if state is None else str(state),
            attributes=attributes,
        )

    @property
    def domain(self) -> str:
        """Substring of the entity id before the first dot."""
        return self.entity_id.split(".", 1)[0]

    @property
    def is_unavailable_sentinel(self) -> bool:
        return self.state is UNAVAILABLE

    @property
    def raw_state(self) -> str:
        """State as a plain string; the sentinel maps to an empty string."""
        if isinstance(self.state, EntityAvailability):
            return ""
        return self.state

    @property
    def numeric_state(self) -> Optional[float]:
        """State parsed as a finite float, or None."""
        if isinstance(self.state, EntityAvailability):
            return None
        try:
            value = float(self.state.strip())
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return value

    @property
    def unit(self) -> str:
        unit = self.attributes.get("unit_of_measurement", "")
        return unit if isinstance(unit, str) else ""

    @property
    def device_class(self) -> str:
        device_class = self.attributes.get("device_class", "")
        return device_class if isinstance(device_class, str) else ""


@dataclass(frozen=True)
class SingleStatusRequest:
    """One entity rendered as a full card."""

    entity: EntityRecord
    width: int = 400
    height: int = 200

    mode = RenderMode.SINGLE_STATUS


@dataclass(frozen=True)
class MultiStatusRequest:
    """Up to ten entities rendered as dashboard rows."""

    entities: tuple[EntityRecord, ...]
    title: str = "Sensor Status"
    width: int = 500
    height: Optional[int] = None

    mode = RenderMode.MULTI_STATUS


@dataclass(frozen=True)
class FixedDisplayRequest:
    """Up to fifteen entities rendered for an 800x480 1-bit e-ink panel."""

    entities: tuple[EntityRecord, ...]
    title: str = "SENSOR STATUS"
    width: int = field(default=800, init=False)
    height: int = field(default=480, init=False)

    mode = RenderMode.FIXED_DISPLAY


RenderRequest = Union[SingleStatusRequest, MultiStatusRequest, FixedDisplayRequest]
