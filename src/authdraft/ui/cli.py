# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from authdraft.app import convert_authority
from authdraft.config import ConfigurationError, configure_logging
from authdraft.domain.conversion import (
    default_registry,
    descriptions_to_wikibase,
    error_to_document,
    result_to_document,
    statement_to_wikibase,
)
from authdraft.domain.errors import ConversionError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from authdraft.domain.model import ConversionResult

log = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Draft knowledge-base statements from authority records"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert one authority record")
    convert.add_argument("source", help="Source type, e.g. GND, VIAF, LOC")
    convert.add_argument("external_id", help="Identifier of the record at the source")
    convert.add_argument(
        "--no-reconcile",
        action="store_true",
        help="Skip the Wikidata lookup and propose every statement",
    )
    convert.add_argument(
        "--format",
        choices=("json", "wikibase"),
        default="json",
        help="Output document shape (default: %(default)s)",
    )

    subparsers.add_parser("sources", help="List supported authority sources")

    return parser.parse_args(list(argv))


def _render(result: ConversionResult, output_format: str) -> dict[str, object]:
    if output_format == "wikibase":
        return {
            "existing_entity_id": result.existing_entity_id,
            "claims": [statement_to_wikibase(statement) for statement in result.statements],
            "descriptions": descriptions_to_wikibase(result.descriptions),
            "warnings": list(result.warnings),
        }
    return result_to_document(result)


def _print_sources() -> None:
    for schema in default_registry().sources():
        property_id = schema.property_id or "-"
        print(f"{schema.source_type:<18} {property_id:<6} {schema.label}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level, force=True)

    if parsed_args.command == "sources":
        _print_sources()
        return

    try:
        result = convert_authority(
            parsed_args.source,
            parsed_args.external_id,
            reconcile=not parsed_args.no_reconcile,
        )
    except (ConfigurationError, ValueError) as exc:
        log.error("Invalid invocation: %s", exc)  # noqa: TRY400
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except ConversionError as exc:
        log.debug("Conversion failed", exc_info=exc)
        print(json.dumps(error_to_document(exc), ensure_ascii=False), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(_render(result, parsed_args.format), ensure_ascii=False, indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
