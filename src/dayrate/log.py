"""Timestamped console logging.

Messages may carry context fields, rendered after the message as
``key=value`` pairs in the order given::

    log.debug("Using sample data", category="sleep", days=7)
    # [2026-10-19 08:00:00] DEBUG: Using sample data category=sleep days=7
"""

import sys
from datetime import datetime
from typing import Any

from .env import get_config


def _ts() -> str:
    """Get current timestamp string."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _format(msg: str, fields: dict[str, Any]) -> str:
    if not fields:
        return msg
    ctx = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{msg} {ctx}"


def info(msg: str, **fields: Any) -> None:
    """Print info message to stdout."""
    print(f"[{_ts()}] {_format(msg, fields)}")


def debug(msg: str, **fields: Any) -> None:
    """Print debug message if DAYRATE_DEBUG is enabled."""
    if get_config().debug:
        print(f"[{_ts()}] DEBUG: {_format(msg, fields)}")


def warn(msg: str, **fields: Any) -> None:
    """Print warning message to stderr."""
    print(f"[{_ts()}] WARN: {_format(msg, fields)}", file=sys.stderr)


def error(msg: str, **fields: Any) -> None:
    """Print error message to stderr."""
    print(f"[{_ts()}] ERROR: {_format(msg, fields)}", file=sys.stderr)
