"""Image routes: single status card, multi-status dashboard and TRMNL display."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from aiohttp import web

from ...core.ha_client import HomeAssistantClient
from ...render import (
    EntityRecord,
    FixedDisplayRequest,
    MultiStatusRequest,
    RenderContractError,
    RenderRequest,
    RenderResources,
    SingleStatusRequest,
    check_request,
    render,
)
from ...render.layout import FIXED_MAX_ENTITIES, MULTI_MAX_ENTITIES
from ..exceptions import RequestValidationError
from ..params import parse_dimension, parse_sensor_list, parse_title, validate_entity_id
from ..responses import encode_png, image_response, text_error

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _render_png(request: RenderRequest, resources: RenderResources) -> bytes:
    return encode_png(render(request, resources))


def _placeholders(entity_ids: tuple[str, ...]) -> tuple[EntityRecord, ...]:
    return tuple(EntityRecord.unavailable(entity_id) for entity_id in entity_ids)


def _check(request: RenderRequest) -> None:
    try:
        check_request(request)
    except RenderContractError as e:
        raise RequestValidationError(str(e)) from e


def register_status_routes(
    app: web.Application,
    ha_client: HomeAssistantClient,
    resources: RenderResources,
    cache_max_age: int,
) -> None:
    """Register the health and image routes.

    Args:
        app: aiohttp web application
        ha_client: Client used to fetch entity states
        resources: Shared font resources for the rendering engine
        cache_max_age: Cache-Control max-age for image responses
    """

    async def render_response(render_request: RenderRequest) -> web.Response:
        started = time.perf_counter()
        loop = asyncio.get_running_loop()
        try:
            body = await loop.run_in_executor(None, _render_png, render_request, resources)
        except RenderContractError as e:
            return text_error(str(e), 400)
        logger.debug(
            "Rendered %s (%d bytes) in %.1f ms",
            render_request.mode.value,
            len(body),
            (time.perf_counter() - started) * 1000,
        )
        return image_response(body, cache_max_age)

    def guarded(handler: Handler) -> Handler:
        async def wrapper(request: web.Request) -> web.StreamResponse:
            try:
                return await handler(request)
            except RequestValidationError as e:
                logger.info("Rejected %s: %s", request.path, e)
                return text_error(str(e), e.status)
            except Exception:
                logger.exception("Failed to generate image for %s", request.path_qs)
                return text_error("Failed to generate image", 500)

        return wrapper

    async def health_check(_request: web.Request) -> web.Response:
        return web.Response(text="OK", content_type="text/plain")

    async def single_status(request: web.Request) -> web.StreamResponse:
        entity_id = validate_entity_id(request.match_info["entity_id"])
        width = parse_dimension(request.query, "width", 400)
        height = parse_dimension(request.query, "height", 200)
        logger.info("Rendering status image for %s", entity_id)

        record = await ha_client.fetch_entity(entity_id)
        return await render_response(SingleStatusRequest(record, width=width, height=height))

    async def multi_status(request: web.Request) -> web.StreamResponse:
        sensor_ids = parse_sensor_list(request.query.get("sensors"), MULTI_MAX_ENTITIES)
        title = parse_title(request.query, "Sensor Status")
        width = parse_dimension(request.query, "width", 500)
        height = parse_dimension(request.query, "height", None)

        # Reject impossible geometry before calling upstream
        _check(MultiStatusRequest(_placeholders(sensor_ids), title=title, width=width, height=height))
        logger.info("Rendering multi-sensor status image for %d sensors", len(sensor_ids))

        records = await ha_client.fetch_entities(sensor_ids)
        return await render_response(
            MultiStatusRequest(tuple(records), title=title, width=width, height=height)
        )

    async def trmnl_display(request: web.Request) -> web.StreamResponse:
        sensor_ids = parse_sensor_list(request.query.get("sensors"), FIXED_MAX_ENTITIES)
        title = parse_title(request.query, "SENSOR STATUS")
        logger.info("Rendering TRMNL sensor display for %d sensors", len(sensor_ids))

        records = await ha_client.fetch_entities(sensor_ids)
        return await render_response(FixedDisplayRequest(tuple(records), title=title))

    app.router.add_get("/health", health_check)
    app.router.add_get("/status/{entity_id}", guarded(single_status))
    app.router.add_get("/multi-status", guarded(multi_status))
    app.router.add_get("/trmnl", guarded(trmnl_display))
