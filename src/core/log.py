"""Logging setup shared by every entry point.

Why a single place:
- The root logger gets exactly one handler, so repeated CLI invocations in
  the same process (tests, `browse`) never duplicate lines.
- Rich renders log records on stderr and keeps stdout for command output.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = "WARNING", console: Console | None = None) -> None:
    """Configure the root logger with a `RichHandler`."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    # httpx logs every request at INFO; keep it for --verbose only.
    logging.getLogger("httpx").setLevel(level if level <= logging.DEBUG else logging.WARNING)
