"""Configuration constants and .env loading.

WHY: The extractor core has no configuration of its own, but the file
reader and the CLI around it do: which text encoding bundles use, how
chatty logging is, and which output format to produce by default.
Keeping those values here, as plain module-level data, makes them easy
to find and override.

HOW: python-dotenv loads the .env file on import. Constants are read
from the environment with defaults. load_log_level() turns the
configured level name into a logging level.

RULES:
- BUNDLE_EXTRACTOR_LOG_LEVEL: logging level name (default WARNING)
- BUNDLE_EXTRACTOR_ENCODING: bundle file encoding (default utf-8)
- BUNDLE_EXTRACTOR_DEFAULT_FORMAT: CLI output format(s) (default json)
- Unknown log level names raise ValueError; nothing falls back silently
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Bundle files
# ---------------------------------------------------------------------------

BUNDLE_FILE_EXTENSIONS: set[str] = {".js", ".mjs", ".cjs"}
"""Extensions the CLI expects bundles to have (lowercase, with dot)."""

SOURCE_ENCODING = os.getenv("BUNDLE_EXTRACTOR_ENCODING", "utf-8")

# ---------------------------------------------------------------------------
# CLI defaults
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("BUNDLE_EXTRACTOR_LOG_LEVEL", "WARNING")
DEFAULT_FORMAT = os.getenv("BUNDLE_EXTRACTOR_DEFAULT_FORMAT", "json")


def load_log_level(name: str | None = None) -> int:
    """Resolve a logging level name to its numeric value.

    RULES:
    - name=None uses LOG_LEVEL from the environment
    - Case-insensitive ("debug" == "DEBUG")
    - Raises ValueError for names logging does not know
    """
    level_name = (name or LOG_LEVEL).strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(
            "Unknown log level '{}'. Use DEBUG, INFO, WARNING, ERROR or CRITICAL.".format(
                level_name
            )
        )
    return level
