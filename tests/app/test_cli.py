from __future__ import annotations

import json
from datetime import datetime  # noqa: TC003

import pytest

from authdraft.config import MissingConfigurationError
from authdraft.domain.errors import UnknownSourceError
from authdraft.domain.model import (
    AuthorityReference,
    CandidateStatement,
    ConversionResult,
    Date,
    DatePrecision,
    Reference,
    SourceType,
    Text,
)
from authdraft.ui import cli as cli_module


def _result(retrieved_at: datetime) -> ConversionResult:
    authority = AuthorityReference(SourceType.EXAMPLE_AUTHORITY, "12345")
    reference = Reference(SourceType.EXAMPLE_AUTHORITY, "12345", retrieved_at)
    return ConversionResult(
        authority=authority,
        statements=(
            CandidateStatement("P2561", Text("Jane Doe", "en"), reference),
            CandidateStatement("P569", Date(1950, 5, precision=DatePrecision.MONTH), reference),
        ),
    )


def test_convert_prints_result_document(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    retrieved_at: datetime,
) -> None:
    captured: dict[str, object] = {}

    def fake_convert(source: str, external_id: str, **kwargs: object) -> ConversionResult:
        captured.update(kwargs, source=source, external_id=external_id)
        return _result(retrieved_at)

    monkeypatch.setattr(cli_module, "convert_authority", fake_convert)

    cli_module.main(["convert", "example_authority", "12345"])

    assert captured == {"source": "example_authority", "external_id": "12345", "reconcile": True}
    document = json.loads(capsys.readouterr().out)
    assert [statement["property"] for statement in document["statements"]] == ["P2561", "P569"]
    assert document["warnings"] == []
    assert document["existing_entity_id"] is None


def test_convert_without_reconciliation_in_wikibase_format(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    retrieved_at: datetime,
) -> None:
    captured: dict[str, object] = {}

    def fake_convert(_source: str, _external_id: str, **kwargs: object) -> ConversionResult:
        captured.update(kwargs)
        return _result(retrieved_at)

    monkeypatch.setattr(cli_module, "convert_authority", fake_convert)

    cli_module.main(
        [
            "--log-level",
            "debug",
            "convert",
            "EXAMPLE_AUTHORITY",
            "12345",
            "--no-reconcile",
            "--format",
            "wikibase",
        ]
    )

    assert captured["reconcile"] is False
    document = json.loads(capsys.readouterr().out)
    assert [claim["mainsnak"]["property"] for claim in document["claims"]] == ["P2561", "P569"]


def test_conversion_error_is_printed_as_error_document(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_convert(*_: object, **__: object) -> ConversionResult:
        raise UnknownSourceError("Unknown source type: 'NOPE'")

    monkeypatch.setattr(cli_module, "convert_authority", fake_convert)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["convert", "NOPE", "1"])

    assert exc.value.code == 1
    assert json.loads(capsys.readouterr().err) == {
        "error": {"kind": "unknown_source", "message": "Unknown source type: 'NOPE'"}
    }


def test_configuration_error_exits_with_usage_status(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_convert(*_: object, **__: object) -> ConversionResult:
        raise MissingConfigurationError(["AUTHDRAFT_CONTACT"])

    monkeypatch.setattr(cli_module, "convert_authority", fake_convert)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["convert", "GND", "118540238"])

    assert exc.value.code == 2
    assert "AUTHDRAFT_CONTACT" in capsys.readouterr().err


def test_sources_lists_every_source(capsys: pytest.CaptureFixture[str]) -> None:
    cli_module.main(["sources"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(SourceType)
    assert any(line.startswith("GND") and "P227" in line for line in lines)


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main([])

    assert exc.value.code == 2
