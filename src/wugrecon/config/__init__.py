"""Application configuration helpers."""

from __future__ import annotations

from .desired_state import dump_record, load_device, load_monitor, parse_device, parse_monitor
from .env import env_flag, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http import HttpClientConfig, RateLimit
from .logging import configure_logging
from .wug import WugConfig, get_wug_config, parse_rate_limit

__all__ = [
    "ConfigurationError",
    "HttpClientConfig",
    "MissingConfigurationError",
    "RateLimit",
    "WugConfig",
    "configure_logging",
    "dump_record",
    "env_flag",
    "get_wug_config",
    "load_device",
    "load_monitor",
    "parse_device",
    "parse_monitor",
    "parse_rate_limit",
    "require_env_vars",
]
