"""Authority record endpoints and HTTP settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Literal

from authdraft import __version__
from authdraft.domain.model import GraphFormat, SourceType

from .env import float_env_var, optional_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

AUTHORITY_TIMEOUT_SECONDS = 30.0
RDF_XML: Final[str] = "application/rdf+xml"

type JsonBodyFactory = Callable[[str], dict[str, Any]]


@dataclass(frozen=True, slots=True)
class FetchEndpoint:
    """How to request one source's machine-readable record."""

    url_template: str
    graph_format: GraphFormat = GraphFormat.RDF_XML
    method: Literal["GET", "POST"] = "GET"
    accept: str = RDF_XML
    json_body: JsonBodyFactory | None = None

    def url(self, external_id: str) -> str:
        return self.url_template.format(id=external_id)

    def body(self, external_id: str) -> dict[str, Any] | None:
        return self.json_body(external_id) if self.json_body is not None else None


def viaf_cluster_request(external_id: str) -> dict[str, Any]:
    return {
        "reqValues": {"recordId": external_id, "isSourceId": False, "acceptFiletype": "rdf+xml"},
        "meta": {"pageIndex": 0, "pageSize": 1},
    }


DEFAULT_ENDPOINTS: Final[Mapping[SourceType, FetchEndpoint]] = MappingProxyType(
    {
        SourceType.EXAMPLE_AUTHORITY: FetchEndpoint("http://example.org/authority/{id}.rdf"),
        SourceType.VIAF: FetchEndpoint(
            "https://viaf.org/api/cluster-record",
            method="POST",
            json_body=viaf_cluster_request,
        ),
        SourceType.GND: FetchEndpoint("https://d-nb.info/gnd/{id}/about/lds.rdf"),
        SourceType.LOC: FetchEndpoint("https://id.loc.gov/authorities/names/{id}.rdf"),
        SourceType.BNE: FetchEndpoint("https://datos.bne.es/resource/{id}.rdf"),
        SourceType.IDREF: FetchEndpoint("https://www.idref.fr/{id}.rdf"),
        SourceType.NTA: FetchEndpoint("http://data.bibliotheken.nl/doc/thes/p{id}.rdf"),
        SourceType.ORCID: FetchEndpoint("https://orcid.org/{id}"),
    }
)


@dataclass(frozen=True, slots=True)
class AuthorityConfig:
    resilience: ResilienceConfig
    endpoints: Mapping[SourceType, FetchEndpoint] = field(default_factory=lambda: DEFAULT_ENDPOINTS)
    fetch_timeout: float = AUTHORITY_TIMEOUT_SECONDS


def build_user_agent() -> str:
    """``AUTHDRAFT_USER_AGENT`` or ``authdraft/<version>``, plus ``AUTHDRAFT_CONTACT``."""

    agent = optional_env_var("AUTHDRAFT_USER_AGENT", f"authdraft/{__version__}")
    contact = optional_env_var("AUTHDRAFT_CONTACT")
    return f"{agent} ({contact})" if contact else str(agent)


def get_cache_config(*, should_cache: ShouldCacheHook | None = None) -> CacheConfig | None:
    """Read ``AUTHDRAFT_HTTP_CACHE`` (``sqlite``, ``memory`` or ``off``)."""

    mode = (optional_env_var("AUTHDRAFT_HTTP_CACHE", "sqlite") or "sqlite").lower()
    match mode:
        case "off":
            return None
        case "sqlite":
            return CacheConfig(backend="sqlite", should_cache=should_cache)
        case "memory":
            return CacheConfig(backend="memory", should_cache=should_cache)
        case _:
            raise ConfigurationError(
                f"AUTHDRAFT_HTTP_CACHE must be sqlite, memory or off, got {mode!r}"
            )


def get_authority_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> AuthorityConfig:
    fetch_timeout = float_env_var("AUTHDRAFT_FETCH_TIMEOUT", AUTHORITY_TIMEOUT_SECONDS)
    return AuthorityConfig(
        resilience=resilience
        or ResilienceConfig(
            name="authority",
            timeout_seconds=fetch_timeout,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            cache=get_cache_config(should_cache=cache_predicate),
            default_headers={"User-Agent": build_user_agent()},
        ),
        fetch_timeout=fetch_timeout,
    )
