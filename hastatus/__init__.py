"""hastatus - Home Assistant status image server.

Renders entity states as PNG cards, dashboards and 1-bit e-ink screens. Only
the logging bootstrap lives here; the server is imported on demand so the
rendering engine can be used without the HTTP stack.
"""

__version__ = "0.1.0"

from typing import Optional


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Honors HASTATUS_DEBUG (truthy values: "1", "true", "yes", "on"), which
    forces DEBUG verbosity regardless of the requested level.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    debug_env = os.environ.get("HASTATUS_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure a handler once to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message; only the level is colorized.
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


def run_server(args: Optional[object] = None) -> None:
    """Load configuration, apply command line overrides and start the server.

    Args:
        args: Optional argparse namespace with ``config``, ``host`` and ``port``

    Raises:
        ConfigError: If the configuration is unusable (e.g. no HA_TOKEN)
    """
    import logging
    import os

    _init_logging(os.environ.get("HASTATUS_LOG_LEVEL"))

    from .api.server import start_server
    from .config_loader import load_config

    logger = logging.getLogger(__name__)

    config = load_config(getattr(args, "config", None))

    overrides = {}
    host = getattr(args, "host", None)
    if host:
        overrides["server_bind"] = host
    port = getattr(args, "port", None)
    if port is not None:
        overrides["server_port"] = port
    if overrides:
        logger.debug("Applied command line overrides: %s", overrides)
        config = config.merged(overrides)

    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))
    logger.debug("Resolved configuration (diagnostic): %s", config.diagnostics())

    start_server(config)
