"""Best-effort reconciliation of candidate statements against the knowledge base."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from authdraft.domain.errors import ReconciliationError
from authdraft.domain.model import UNDETERMINED_LANGUAGE, AuthorityReference, ConversionResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from authdraft.domain.model import CandidateStatement, SourceType, Text
    from authdraft.domain.ports import ExistingEntity, KnowledgeBaseLookup

log = getLogger(__name__)


class StatementReconciler(Protocol):
    async def reconcile(
        self,
        external_id: str,
        source_type: SourceType,
        candidate_statements: Sequence[CandidateStatement],
        *,
        descriptions: Sequence[Text] = (),
        warnings: Sequence[str] = (),
        timeout: float | None = None,
    ) -> ConversionResult: ...


class Reconciler:
    """Drop candidate statements that the matching entity already carries.

    Descriptions in a language the entity already describes itself in are
    dropped as well. A failed, ambiguous or timed-out lookup never aborts the
    conversion: every candidate passes through and one warning is appended.
    """

    def __init__(self, lookup: KnowledgeBaseLookup) -> None:
        self._lookup = lookup

    async def reconcile(
        self,
        external_id: str,
        source_type: SourceType,
        candidate_statements: Sequence[CandidateStatement],
        *,
        descriptions: Sequence[Text] = (),
        warnings: Sequence[str] = (),
        timeout: float | None = None,
    ) -> ConversionResult:
        unreconciled = ConversionResult(
            AuthorityReference(source_type, external_id),
            tuple(candidate_statements),
            descriptions=tuple(descriptions),
            warnings=tuple(warnings),
        )
        try:
            async with asyncio.timeout(timeout):
                entity = await self._lookup.lookup(source_type, external_id)
        except TimeoutError:
            log.warning("Reconciliation lookup for %s %s timed out", source_type, external_id)
            return _skipped(unreconciled, f"lookup timed out after {timeout}s")
        except ReconciliationError as exc:
            log.warning("Reconciliation lookup for %s %s failed: %s", source_type, external_id, exc)
            return _skipped(unreconciled, str(exc))
        except Exception as exc:
            log.exception("Reconciliation lookup for %s %s crashed", source_type, external_id)
            return _skipped(unreconciled, f"{type(exc).__name__}: {exc}")

        if entity is None:
            log.debug("No existing entity for %s %s", source_type, external_id)
            return unreconciled

        remaining = _without_existing(unreconciled.statements, entity)
        log.info(
            "Reconciled %s %s with %s: %d of %d statements already present",
            source_type,
            external_id,
            entity.entity_id,
            len(unreconciled.statements) - len(remaining),
            len(unreconciled.statements),
        )
        return replace(
            unreconciled,
            statements=remaining,
            descriptions=tuple(
                description
                for description in unreconciled.descriptions
                if not entity.has_description(description.language or UNDETERMINED_LANGUAGE)
            ),
            existing_entity_id=entity.entity_id,
        )


class NullReconciler:
    """Offline stand-in: passes every statement through untouched."""

    async def reconcile(
        self,
        external_id: str,
        source_type: SourceType,
        candidate_statements: Sequence[CandidateStatement],
        *,
        descriptions: Sequence[Text] = (),
        warnings: Sequence[str] = (),
        timeout: float | None = None,  # noqa: ARG002
    ) -> ConversionResult:
        return ConversionResult(
            AuthorityReference(source_type, external_id),
            tuple(candidate_statements),
            descriptions=tuple(descriptions),
            warnings=tuple(warnings),
        )


def _skipped(result: ConversionResult, reason: str) -> ConversionResult:
    return replace(result, warnings=(*result.warnings, f"Reconciliation skipped: {reason}"))


def _without_existing(
    statements: tuple[CandidateStatement, ...], entity: ExistingEntity
) -> tuple[CandidateStatement, ...]:
    return tuple(
        statement
        for statement in statements
        if not entity.has_claim(statement.property_id, statement.value)
    )


__all__ = ["NullReconciler", "Reconciler", "StatementReconciler"]
