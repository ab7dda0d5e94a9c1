from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003

import pytest

from authdraft.domain.conversion import default_registry
from authdraft.domain.conversion.schema import SchemaRegistry  # noqa: TC001

RETRIEVED_AT = datetime(2024, 3, 1, 12, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in list(os.environ):
        if name.startswith("AUTHDRAFT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("AUTHDRAFT_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def retrieved_at() -> datetime:
    return RETRIEVED_AT


@pytest.fixture
def registry() -> SchemaRegistry:
    return default_registry()
