"""hastatus HTTP server.

Serves PNG status images rendered from Home Assistant entity states. Entity
states are fetched per request; nothing is cached server-side.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Optional

from aiohttp import web

from ..config_loader import Config
from ..core.ha_client import HomeAssistantClient
from ..core.http_client import close_all_clients
from ..lite_logging import configure_logging, debug_requested
from ..render import RenderResources
from .middleware import correlation_id_middleware, cors_middleware
from .routes import register_status_routes

logger = logging.getLogger(__name__)


def _make_app(
    config: Config,
    resources: RenderResources,
    ha_client: HomeAssistantClient,
) -> web.Application:
    """Create the aiohttp application with routes and middlewares wired in.

    Args:
        config: Server configuration
        resources: Font resources shared by every render
        ha_client: Client used to fetch entity states

    Returns:
        Configured web.Application
    """
    app = web.Application(middlewares=[correlation_id_middleware, cors_middleware])
    register_status_routes(app, ha_client, resources, config.cache_max_age)
    logger.debug("Registered %d routes", len(app.router.routes()))
    return app


async def _serve(config: Config, external_stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the HTTP server until signalled to stop.

    Args:
        config: Server configuration
        external_stop_event: Optional event to signal shutdown. If provided,
            signal handlers are NOT registered (caller owns signal handling).
    """
    token = config.require_token()
    resources = RenderResources.load(config.font_path)
    ha_client = HomeAssistantClient(config.ha_url, token, timeout=config.request_timeout)
    stop_event = external_stop_event or asyncio.Event()

    app = _make_app(config, resources, ha_client)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=config.server_bind, port=config.server_port)
    await site.start()

    logger.info("Server started successfully on %s:%d", config.server_bind, config.server_port)
    logger.info("Home Assistant URL: %s", config.ha_url)

    if external_stop_event is None:
        loop = asyncio.get_running_loop()

        def _on_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, _on_signal)

    try:
        await stop_event.wait()
        logger.info("Stop event received, shutting down")
    finally:
        await runner.cleanup()
        try:
            await close_all_clients()
        except Exception as e:
            logger.warning("Error cleaning up shared HTTP clients: %s", e)
        logger.info("Server shutdown complete")


def start_server(config: Config) -> None:
    """Run the server, blocking until SIGINT/SIGTERM.

    Raises:
        ConfigError: If HA_TOKEN is not configured
    """
    configure_logging(
        debug_mode=config.log_level == "DEBUG" or debug_requested(),
        log_level=config.log_level,
    )
    config.require_token()

    try:
        logger.debug("Running asyncio event loop for server")
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
