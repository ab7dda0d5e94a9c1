"""Application configuration helpers."""

from __future__ import annotations

from authdraft.common.logging import configure_logging

from .authority import (
    DEFAULT_ENDPOINTS,
    AuthorityConfig,
    FetchEndpoint,
    build_user_agent,
    get_authority_config,
    get_cache_config,
)
from .env import float_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .wikidata import WikidataConfig, get_wikidata_config

__all__ = [
    "DEFAULT_ENDPOINTS",
    "AuthorityConfig",
    "CacheConfig",
    "ConfigurationError",
    "FetchEndpoint",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "WikidataConfig",
    "build_user_agent",
    "configure_logging",
    "float_env_var",
    "get_authority_config",
    "get_cache_config",
    "get_wikidata_config",
    "optional_env_var",
    "require_env_vars",
]
