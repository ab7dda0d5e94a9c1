from __future__ import annotations

import asyncio
from datetime import datetime  # noqa: TC003

import pytest

from authdraft.app import convert_authority_async
from authdraft.domain.conversion import AuthorityConverter, Reconciler, SchemaRegistry
from authdraft.domain.conversion.sources import BUILTIN_SCHEMAS
from authdraft.domain.errors import FetchError, ParseError, ReconciliationError, UnknownSourceError
from authdraft.domain.model import (
    AuthorityReference,
    Date,
    DatePrecision,
    ExternalId,
    ItemRef,
    SourceType,
    Text,
)
from tests.support.fakes import FakeLookup, FakeRecordFetcher, existing_entity
from tests.support.graphs import EXAMPLE_DOCUMENT, GND_DOCUMENT

EXAMPLE = AuthorityReference(SourceType.EXAMPLE_AUTHORITY, "12345")
GOETHE = AuthorityReference(SourceType.GND, "118540238")


@pytest.fixture
def fetcher() -> FakeRecordFetcher:
    return FakeRecordFetcher(
        {
            (SourceType.EXAMPLE_AUTHORITY, "12345"): EXAMPLE_DOCUMENT,
            (SourceType.GND, "118540238"): GND_DOCUMENT,
            (SourceType.GND, "broken"): b"<rdf:RDF",
        }
    )


def _converter(
    fetcher: FakeRecordFetcher,
    retrieved_at: datetime,
    lookup: FakeLookup | None = None,
    **kwargs: object,
) -> AuthorityConverter:
    return AuthorityConverter(
        fetcher=fetcher,
        reconciler=Reconciler(lookup) if lookup is not None else None,
        clock=lambda: retrieved_at,
        **kwargs,  # type: ignore[arg-type]
    )


def test_example_record_converts_to_two_statements(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    result = asyncio.run(_converter(fetcher, retrieved_at).convert(EXAMPLE))

    assert result.authority == EXAMPLE
    assert result.warnings == ()
    assert result.existing_entity_id is None
    assert [statement.claim_key for statement in result.statements] == [
        ("P2561", Text("Jane Doe", "en")),
        ("P569", Date(1950, 5, precision=DatePrecision.MONTH)),
    ]
    for statement in result.statements:
        assert statement.reference.source_type is SourceType.EXAMPLE_AUTHORITY
        assert statement.reference.external_id == "12345"
        assert statement.reference.retrieved_at == retrieved_at


def test_reconciled_conversion_is_idempotent_with_a_fixed_clock(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    lookup = FakeLookup(existing_entity("Q5879", ("P31", ItemRef("Q5"))))
    converter = _converter(fetcher, retrieved_at, lookup)

    first = asyncio.run(converter.convert(GOETHE))
    second = asyncio.run(converter.convert(GOETHE))

    assert first == second
    assert first.existing_entity_id == second.existing_entity_id == "Q5879"
    assert first.warnings == second.warnings
    assert [statement.claim_key for statement in first.statements] == [
        statement.claim_key for statement in second.statements
    ]
    assert len(lookup.calls) == 2


def test_unknown_source_fails_before_fetching(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    registry = SchemaRegistry(
        schema for schema in BUILTIN_SCHEMAS if schema.source_type is not SourceType.ORCID
    )
    converter = _converter(fetcher, retrieved_at, registry=registry)

    with pytest.raises(UnknownSourceError):
        asyncio.run(converter.convert(AuthorityReference(SourceType.ORCID, "0000-0002-1825-0097")))

    assert fetcher.calls == []


def test_unknown_source_tag_is_rejected_by_the_entry_point(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    converter = _converter(fetcher, retrieved_at)

    with pytest.raises(UnknownSourceError):
        asyncio.run(convert_authority_async("NOT_A_SOURCE", "1", converter=converter))

    assert fetcher.calls == []


def test_fetch_failure_aborts(fetcher: FakeRecordFetcher, retrieved_at: datetime) -> None:
    with pytest.raises(FetchError):
        asyncio.run(
            _converter(fetcher, retrieved_at).convert(AuthorityReference(SourceType.GND, "404"))
        )


def test_slow_fetch_is_a_fetch_error(retrieved_at: datetime) -> None:
    slow = FakeRecordFetcher({(SourceType.GND, "118540238"): GND_DOCUMENT}, delay=1.0)
    converter = _converter(slow, retrieved_at, fetch_timeout=0.01)

    with pytest.raises(FetchError, match="timed out"):
        asyncio.run(converter.convert(GOETHE))


def test_parse_failure_aborts(fetcher: FakeRecordFetcher, retrieved_at: datetime) -> None:
    with pytest.raises(ParseError):
        asyncio.run(
            _converter(fetcher, retrieved_at).convert(
                AuthorityReference(SourceType.GND, "broken")
            )
        )


def test_reconciliation_removes_existing_claims(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    offline = asyncio.run(_converter(fetcher, retrieved_at).convert(GOETHE))
    lookup = FakeLookup(
        existing_entity(
            "Q5879",
            ("P227", ExternalId("118540238")),
            ("P31", ItemRef("Q5")),
            ("P569", Date(1749, 8, 28, DatePrecision.DAY)),
        )
    )

    reconciled = asyncio.run(_converter(fetcher, retrieved_at, lookup).convert(GOETHE))

    assert reconciled.existing_entity_id == "Q5879"
    offline_claims = [statement.claim_key for statement in offline.statements]
    reconciled_claims = [statement.claim_key for statement in reconciled.statements]
    assert reconciled_claims == [
        claim
        for claim in offline_claims
        if claim[0] not in {"P227", "P31", "P569"}
    ]
    assert len(offline_claims) - len(reconciled_claims) == 3
    assert lookup.calls == [(SourceType.GND, "118540238")]


def test_reconciliation_failure_is_only_a_warning(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    offline = asyncio.run(_converter(fetcher, retrieved_at).convert(GOETHE))
    lookup = FakeLookup(error=ReconciliationError("service unavailable"))

    result = asyncio.run(_converter(fetcher, retrieved_at, lookup).convert(GOETHE))

    assert result.statements == offline.statements
    assert result.warnings == ("Reconciliation skipped: service unavailable",)


def test_unexpected_lookup_error_is_only_a_warning(
    fetcher: FakeRecordFetcher, retrieved_at: datetime
) -> None:
    lookup = FakeLookup(error=OSError("database is locked"))

    result = asyncio.run(_converter(fetcher, retrieved_at, lookup).convert(EXAMPLE))

    assert len(result.statements) == 2
    assert result.warnings == ("Reconciliation skipped: OSError: database is locked",)
