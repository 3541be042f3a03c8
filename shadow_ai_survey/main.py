"""Command-line entry point for survey analytics.

Reads the stored responses of one survey from a JSON file (an array of
response rows), runs the analytics engine and prints the result as JSON,
the same payload the dashboard consumes.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from shadow_ai_survey import config
from shadow_ai_survey.analytics.aggregator import calculate_analytics
from shadow_ai_survey.catalog import ToolCatalog, load_catalog
from shadow_ai_survey.exceptions import CatalogError, ResponseFormatError
from shadow_ai_survey.survey.models import parse_responses

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shadow-ai-analytics",
        description="Aggregate AI-usage survey responses into risk analytics.",
    )
    parser.add_argument("responses", help="JSON file holding an array of response rows")
    parser.add_argument(
        "--catalog",
        default=None,
        help="JSON tool catalog overriding the built-in list",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=config.JSON_INDENT,
        help="indentation of the printed JSON (default: %(default)s)",
    )
    return parser


def _read_rows(path: str) -> List[Any]:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ResponseFormatError(f"Cannot read responses file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Responses file {path} is not valid JSON") from exc

    if not isinstance(payload, list):
        raise ResponseFormatError(f"Responses file {path} must contain a JSON array")
    return payload


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit status."""

    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.LOG_LEVEL,
        stream=sys.stderr,
    )

    try:
        catalog: Optional[ToolCatalog] = (
            load_catalog(args.catalog) if args.catalog else None
        )
        records = parse_responses(_read_rows(args.responses))
        result = calculate_analytics(records, catalog=catalog)
    except (CatalogError, ResponseFormatError) as exc:
        logger.error("Failed to calculate analytics: %s", exc)
        return 1

    logger.info(
        "Analytics ready for %d responses (%d risk flags)",
        result.total_responses,
        len(result.risk_flags),
    )
    print(json.dumps(result.to_dict(), indent=args.indent or None, ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
