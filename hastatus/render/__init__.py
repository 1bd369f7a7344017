"""Status rendering engine: entity snapshots in, canvases out."""

from .canvas import Canvas, MonoCanvas
from .classifier import classify
from .colors import Palette, Pattern, resolve
from .engine import check_request, render
from .exceptions import RenderContractError, RenderError
from .layout import LayoutPlan, solve
from .models import (
    UNAVAILABLE,
    EntityRecord,
    FixedDisplayRequest,
    MultiStatusRequest,
    RenderMode,
    RenderRequest,
    SingleStatusRequest,
    StatusCategory,
)
from .monochrome import reduce_to_1bit
from .region import LayoutRegion
from .resources import FontTier, RenderResources

__all__ = [
    "UNAVAILABLE",
    "Canvas",
    "EntityRecord",
    "FixedDisplayRequest",
    "FontTier",
    "LayoutPlan",
    "LayoutRegion",
    "MonoCanvas",
    "MultiStatusRequest",
    "Palette",
    "Pattern",
    "RenderContractError",
    "RenderError",
    "RenderMode",
    "RenderRequest",
    "RenderResources",
    "SingleStatusRequest",
    "StatusCategory",
    "check_request",
    "classify",
    "reduce_to_1bit",
    "render",
    "resolve",
    "solve",
]
