"""Entry point of the status rendering engine.

``render`` is a pure function of its request and resources: it performs no
I/O and shares no mutable state, so concurrent calls are safe.
"""

from __future__ import annotations

import logging
from typing import Union

from .canvas import Canvas, MonoCanvas
from .composer import compose, resolved_plan
from .exceptions import RenderContractError
from .models import FixedDisplayRequest, MultiStatusRequest, RenderRequest, SingleStatusRequest
from .monochrome import reduce_to_1bit
from .resources import RenderResources

logger = logging.getLogger(__name__)


def check_request(request: RenderRequest) -> None:
    """Validate a render request against its mode's entity and canvas bounds.

    Raises:
        RenderContractError: If the request cannot be rendered
    """
    if not isinstance(request, (SingleStatusRequest, MultiStatusRequest, FixedDisplayRequest)):
        raise RenderContractError(f"Unsupported render request: {type(request).__name__}")
    resolved_plan(request)


def render(request: RenderRequest, resources: RenderResources) -> Union[Canvas, MonoCanvas]:
    """Render a request to a canvas.

    Args:
        request: Render request for one of the three modes
        resources: Shared font resources

    Returns:
        Canvas for single/multi status; MonoCanvas for the fixed display

    Raises:
        RenderContractError: If the request violates the mode's bounds
    """
    check_request(request)
    item_count = 1 if isinstance(request, SingleStatusRequest) else len(request.entities)
    logger.debug("Rendering %s request with %d entities", request.mode.value, item_count)
    canvas = compose(request, resources)
    if isinstance(request, FixedDisplayRequest):
        return reduce_to_1bit(canvas)
    return canvas
