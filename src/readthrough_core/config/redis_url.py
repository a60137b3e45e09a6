"""Redis connection URL parsing into a validated options bundle."""

from __future__ import annotations

from urllib.parse import unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from readthrough_core.constants import (
    DEFAULT_REDIS_DB,
    DEFAULT_REDIS_PORT,
    REDIS_URL_SCHEMES,
)
from readthrough_core.exceptions import ConfigError


class RedisOptions(BaseModel):
    """Connection options for a Redis-compatible store."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(description="Server hostname or IP address")
    port: int = Field(default=DEFAULT_REDIS_PORT, ge=1, le=65535, description="Server TCP port")
    db: int = Field(default=DEFAULT_REDIS_DB, ge=0, description="Logical database index")
    username: str | None = Field(default=None, description="ACL username")
    password: SecretStr | None = Field(default=None, description="AUTH password")
    ssl: bool = Field(default=False, description="Use TLS (rediss:// scheme)")

    @property
    def address(self) -> str:
        """Return ``host:port``."""
        return f"{self.host}:{self.port}"


def parse_redis_url(url: str) -> RedisOptions:
    """Parse ``redis[s]://[user[:pass]@]host[:port][/db]`` into RedisOptions.

    Raises:
        ConfigError: If the URL is empty or any component is invalid.
    """
    if not url or not url.strip():
        msg = "redis URL must not be empty"
        raise ConfigError(msg)

    parts = urlsplit(url.strip())
    if parts.scheme not in REDIS_URL_SCHEMES:
        msg = f"unsupported redis URL scheme {parts.scheme!r} (expected redis or rediss)"
        raise ConfigError(msg)

    host = parts.hostname
    if not host:
        msg = f"redis URL {url!r} has no host"
        raise ConfigError(msg)

    try:
        port = parts.port
    except ValueError as exc:
        msg = f"redis URL {url!r} has an invalid port"
        raise ConfigError(msg) from exc

    db = _parse_db(parts.path, url)

    username = unquote(parts.username) if parts.username else None
    password = SecretStr(unquote(parts.password)) if parts.password else None

    try:
        return RedisOptions(
            host=host,
            port=DEFAULT_REDIS_PORT if port is None else port,
            db=db,
            username=username,
            password=password,
            ssl=parts.scheme == "rediss",
        )
    except ValidationError as exc:
        msg = f"redis URL {url!r} is invalid: {exc}"
        raise ConfigError(msg) from exc


def _parse_db(path: str, url: str) -> int:
    """Extract the database index from the URL path (``/3`` -> 3)."""
    raw = path.lstrip("/")
    if not raw:
        return DEFAULT_REDIS_DB
    if not raw.isdigit():
        msg = f"redis URL {url!r} has an invalid database index {raw!r}"
        raise ConfigError(msg)
    return int(raw)
