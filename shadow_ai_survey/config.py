"""Configuration constants for the survey analytics tooling."""
from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Log level used by the command-line entry point
LOG_LEVEL: str = os.getenv("SURVEY_LOG_LEVEL", "INFO")

# Optional JSON file replacing the built-in AI tool catalog
TOOL_CATALOG_PATH: Optional[str] = os.getenv("SURVEY_TOOL_CATALOG_PATH") or None


def _get_json_indent_from_env() -> int:  # noqa: WPS430 – tiny helper
    raw_val = os.getenv("SURVEY_JSON_INDENT")
    if not raw_val:
        return 2
    try:
        parsed = int(raw_val)
    except ValueError:
        logger.warning("Invalid SURVEY_JSON_INDENT value '%s'; must be integer.", raw_val)
        return 2
    if parsed < 0:
        logger.warning("Ignoring SURVEY_JSON_INDENT=%s (must be >= 0)", raw_val)
        return 2
    return parsed


# Indentation of the analytics JSON printed by the CLI
JSON_INDENT: int = _get_json_indent_from_env()
