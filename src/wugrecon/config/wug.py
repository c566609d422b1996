"""WhatsUp Gold connection settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

from .env import env_flag, require_env_vars
from .errors import ConfigurationError
from .http import HttpClientConfig, RateLimit

WUG_TIMEOUT_SECONDS = 30.0


def _default_http_config() -> HttpClientConfig:
    return HttpClientConfig(name="wug", timeout_seconds=WUG_TIMEOUT_SECONDS)


def parse_rate_limit(value: str) -> RateLimit:
    """Parse ``CALLS/SECONDS``, e.g. ``10/1`` for at most ten requests a second."""

    calls, sep, seconds = value.partition("/")
    try:
        limit = RateLimit(max_calls=int(calls), per_seconds=float(seconds) if sep else 1.0)
    except ValueError:
        raise ConfigurationError(f"Invalid rate limit {value!r}, expected CALLS/SECONDS") from None
    if limit.max_calls <= 0 or limit.per_seconds <= 0:
        raise ConfigurationError(f"Invalid rate limit {value!r}, both parts must be positive")
    return limit


@dataclass(frozen=True)
class WugConfig:
    """Holds the WUG endpoint and the credentials used to authenticate."""

    url: str
    user: str
    password: str = field(repr=False)
    allow_unverified_ssl: bool = False
    http: HttpClientConfig = field(default_factory=_default_http_config)

    def __post_init__(self) -> None:
        object.__setattr__(self, "url", self.url.rstrip("/"))

    def transport_config(self) -> HttpClientConfig:
        """HTTP settings with TLS verification switched off when requested."""

        if self.allow_unverified_ssl:
            return replace(self.http, verify_tls=False)
        return self.http


def get_wug_config(*, http: HttpClientConfig | None = None) -> WugConfig:
    values = require_env_vars(("WUG_URL", "WUG_USER", "WUG_PASSWORD"))
    http_config = http or _default_http_config()
    rate_limit = os.getenv("WUG_RATE_LIMIT", "").strip()
    if rate_limit:
        http_config = replace(http_config, ratelimit=parse_rate_limit(rate_limit))
    return WugConfig(
        url=values["WUG_URL"],
        user=values["WUG_USER"],
        password=values["WUG_PASSWORD"],
        allow_unverified_ssl=env_flag("WUG_ALLOW_UNVERIFIED_SSL"),
        http=http_config,
    )
