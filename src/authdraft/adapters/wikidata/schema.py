"""Wikidata action API response schemas (search and wbgetentities)."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

type EntityId = str  # Q-id, e.g. "Q42"


class WikidataBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = {f"{type(self).__name__}.{key}" for key in extras}.difference(
            self._logged_extra_keys
        )
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug("Wikidata: unmodeled keys: %s", ", ".join(sorted(new_keys)))


class ApiError(WikidataBaseModel):
    code: str
    info: str = ""


class SearchInfo(WikidataBaseModel):
    total_hits: int = Field(alias="totalhits")


class SearchHit(WikidataBaseModel):
    title: EntityId


class SearchQuery(WikidataBaseModel):
    search_info: SearchInfo = Field(alias="searchinfo")
    search: list[SearchHit] = Field(default_factory=list)


class SearchResponse(WikidataBaseModel):
    query: SearchQuery | None = None
    error: ApiError | None = None


class DataValue(WikidataBaseModel):
    type: str
    value: Any


class Snak(WikidataBaseModel):
    snak_type: str = Field(alias="snaktype")
    property: str
    datatype: str | None = None
    datavalue: DataValue | None = None


class Claim(WikidataBaseModel):
    mainsnak: Snak
    rank: str = "normal"


class Term(WikidataBaseModel):
    language: str
    value: str


class Entity(WikidataBaseModel):
    id: EntityId
    missing: str | None = None
    claims: dict[str, list[Claim]] = Field(default_factory=dict)
    descriptions: dict[str, Term] = Field(default_factory=dict)


class EntitiesResponse(WikidataBaseModel):
    entities: dict[str, Entity] = Field(default_factory=dict)
    error: ApiError | None = None
