"""hastatus.config_loader

Configuration for the hastatus server.

- Environment first: ``Config.from_env()`` reads HA_* / HASTATUS_* variables,
  after loading a repository-local ``.env`` without overriding anything that
  is already set.
- ``load_config()`` optionally overlays a YAML file (PyYAML) on top.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_HA_URL = "http://localhost:8123"
DEFAULT_SERVER_BIND = "0.0.0.0"  # nosec: B104 - intended for LAN displays; override via env/config
DEFAULT_SERVER_PORT = 3000
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CACHE_MAX_AGE = 300

# Environment variable -> config key. Earlier entries win for the same key.
_ENV_KEYS: tuple[tuple[str, str], ...] = (
    ("HA_URL", "ha_url"),
    ("HA_TOKEN", "ha_token"),
    ("HASTATUS_SERVER_BIND", "server_bind"),
    ("PORT", "server_port"),
    ("HASTATUS_SERVER_PORT", "server_port"),
    ("HASTATUS_REQUEST_TIMEOUT", "request_timeout"),
    ("HASTATUS_CACHE_MAX_AGE", "cache_max_age"),
    ("HASTATUS_FONT_PATH", "font_path"),
    ("HASTATUS_LOG_LEVEL", "log_level"),
)


class ConfigError(Exception):
    """Raised when configuration is missing or malformed."""


def load_dotenv_defaults(env_path: Optional[Path] = None) -> list[str]:
    """Load KEY=VALUE lines from a .env file into os.environ.

    Keys already present in the environment are left untouched. A missing
    file is not an error.

    Args:
        env_path: File to read; defaults to ./.env

    Returns:
        Keys that were set from the file
    """
    path = env_path or Path.cwd() / ".env"
    if not path.exists():
        return []

    set_keys = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = val
            set_keys.append(key)

    if set_keys:
        # Keys only; values may hold the HA token.
        logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))
    return set_keys


@dataclass
class Config:
    """Typed configuration for hastatus.

    Fields:
        ha_url: Home Assistant base URL, without trailing slash
        ha_token: long-lived access token; required to serve requests
        server_bind: host to bind the HTTP server to
        server_port: port for the HTTP server
        request_timeout: timeout in seconds for each Home Assistant call
        cache_max_age: Cache-Control max-age of image responses
        font_path: optional TrueType font; Pillow's bundled font when unset
        log_level: logging level name
    """

    ha_url: str = DEFAULT_HA_URL
    ha_token: Optional[str] = None
    server_bind: str = DEFAULT_SERVER_BIND
    server_port: int = DEFAULT_SERVER_PORT
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE
    font_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Config:
        """Create Config from a plain mapping, applying defaults and coercion.

        Numeric values that do not parse as integers log a warning and fall
        back to their defaults rather than failing startup.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int, minimum: int = 0) -> int:
            raw = data.get(key, default)
            try:
                value = int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default
            if value < minimum:
                logger.warning("Config %s=%d below minimum %d; using default %d", key, value, minimum, default)
                return default
            return value

        def _optional_str(key: str) -> Optional[str]:
            raw = data.get(key)
            if raw is None:
                return None
            text = str(raw).strip()
            return text or None

        ha_url = _optional_str("ha_url") or DEFAULT_HA_URL
        ha_url = ha_url.rstrip("/")

        return cls(
            ha_url=ha_url,
            ha_token=_optional_str("ha_token"),
            server_bind=_optional_str("server_bind") or DEFAULT_SERVER_BIND,
            server_port=_coerce_int("server_port", DEFAULT_SERVER_PORT, minimum=1),
            request_timeout=_coerce_int("request_timeout", DEFAULT_REQUEST_TIMEOUT, minimum=1),
            cache_max_age=_coerce_int("cache_max_age", DEFAULT_CACHE_MAX_AGE),
            font_path=_optional_str("font_path"),
            log_level=(_optional_str("log_level") or "INFO").upper(),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Config:
        """Load configuration from environment variables.

        Environment Variables:
            HA_URL - Home Assistant base URL
            HA_TOKEN - Home Assistant long-lived access token
            HASTATUS_SERVER_BIND - Host to bind
            PORT / HASTATUS_SERVER_PORT - Port to listen on
            HASTATUS_REQUEST_TIMEOUT - Upstream timeout in seconds
            HASTATUS_CACHE_MAX_AGE - Cache-Control max-age for images
            HASTATUS_FONT_PATH - TrueType font file
            HASTATUS_LOG_LEVEL - Logging level (DEBUG, INFO, WARNING, ERROR)

        Args:
            environ: Mapping to read instead of os.environ (the .env file is
                only consulted when reading os.environ)

        Returns:
            Config instance with values from the environment
        """
        if environ is None:
            load_dotenv_defaults()
            environ = os.environ

        data: dict[str, Any] = {}
        for env_key, cfg_key in _ENV_KEYS:
            value = environ.get(env_key)
            if value and cfg_key not in data:
                data[cfg_key] = value
        return cls.from_dict(data)

    def merged(self, overrides: Mapping[str, Any]) -> Config:
        """Return a new Config with overrides applied on top of this one."""
        unknown = sorted(set(overrides) - set(asdict(self)))
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if k in data})
        return Config.from_dict(data)

    def require_token(self) -> str:
        """Return the HA token, raising ConfigError when it is not configured."""
        if not self.ha_token:
            raise ConfigError("HA_TOKEN is not set; a Home Assistant access token is required")
        return self.ha_token

    def diagnostics(self) -> dict[str, Any]:
        """Config values safe to log; the token is masked."""
        values = asdict(self)
        values["ha_token"] = "***" if self.ha_token else None
        return values


def _load_yaml(path: Path) -> Any:
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: Optional[str] = None) -> Config:
    """Build the effective configuration.

    Args:
        path: Optional YAML file whose top-level mapping overrides values
            taken from the environment.

    Returns:
        Config instance

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping
    """
    cfg = Config.from_env()
    if not path:
        return cfg

    p = Path(path)
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using environment only", p)
        return cfg

    try:
        raw = _load_yaml(p)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to parse config file {p}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {p} must contain a mapping at top level")

    cfg = cfg.merged(raw)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg.diagnostics())
    return cfg
