"""
Logging setup for the command-line entry point.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here so embedding applications keep control of their own output.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str = "INFO", console: Optional[Console] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
