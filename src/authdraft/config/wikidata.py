"""Wikidata lookup configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .authority import build_user_agent
from .env import float_env_var, optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_WIKIDATA_API = "https://www.wikidata.org/w/api.php"
WIKIDATA_LOOKUP_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class WikidataConfig:
    api_url: str
    resilience: ResilienceConfig
    lookup_timeout: float = WIKIDATA_LOOKUP_TIMEOUT_SECONDS


def get_wikidata_config(*, resilience: ResilienceConfig | None = None) -> WikidataConfig:
    """Build the lookup configuration from the environment.

    Wikimedia asks clients to identify themselves, so either
    ``AUTHDRAFT_USER_AGENT`` or ``AUTHDRAFT_CONTACT`` must be set.
    """

    if optional_env_var("AUTHDRAFT_USER_AGENT") is None:
        require_env_vars(("AUTHDRAFT_CONTACT",))
    api_url = optional_env_var("AUTHDRAFT_WIKIDATA_API") or DEFAULT_WIKIDATA_API
    lookup_timeout = float_env_var("AUTHDRAFT_LOOKUP_TIMEOUT", WIKIDATA_LOOKUP_TIMEOUT_SECONDS)

    return WikidataConfig(
        api_url=api_url,
        resilience=resilience
        or ResilienceConfig(
            name="wikidata",
            timeout_seconds=lookup_timeout,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            # reconciliation must see the current state of the entity
            cache=None,
            default_headers={"User-Agent": build_user_agent()},
        ),
        lookup_timeout=lookup_timeout,
    )
