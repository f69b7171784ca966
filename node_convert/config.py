"""Configuration constants and .env loading.

WHY: The library itself needs no settings, but the command-line tool
does (how chatty to be, how to lay out JSON). Keeping those values in
one module, overridable from the environment, keeps them out of logic.

HOW: python-dotenv loads a .env file on import. Constants are read
with os.getenv and plain defaults. load_log_level() turns the
configured level name into a logging level with a clear error.

RULES:
- NODE_CONVERT_LOG_LEVEL: a standard logging level name (default WARNING)
- NODE_CONVERT_JSON_INDENT: integer indent for CLI JSON output; unset
  or empty means compact single-line output
- Library code never reads this module; only the CLI does
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

LOG_LEVEL = os.getenv("NODE_CONVERT_LOG_LEVEL", "WARNING")
JSON_INDENT = os.getenv("NODE_CONVERT_JSON_INDENT", "")

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def load_log_level(name: Optional[str] = None) -> int:
    """Map a level name (default: LOG_LEVEL) to a logging level.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    level = (name if name is not None else LOG_LEVEL).strip().upper()
    if level not in _LEVEL_NAMES:
        raise ValueError(
            f"Unknown log level {level!r}. "
            f"Set NODE_CONVERT_LOG_LEVEL to one of {', '.join(_LEVEL_NAMES)}."
        )
    return getattr(logging, level)


def load_json_indent(value: Optional[str] = None) -> Optional[int]:
    """Indent for CLI JSON output, or None for compact output.

    Raises:
        ValueError: If the value is set but not a non-negative integer.
    """
    raw = (value if value is not None else JSON_INDENT).strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ValueError(
            f"NODE_CONVERT_JSON_INDENT must be a non-negative integer, got {raw!r}"
        )
    return int(raw)
