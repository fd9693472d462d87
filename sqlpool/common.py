"""Shared utilities: console output and file logging.

Used by the CLI; adapter modules log through ``logging.getLogger(__name__)``
and never print.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console

# ---------------------------------------------------------------------------
# Console singleton
# ---------------------------------------------------------------------------
console = Console()

# ---------------------------------------------------------------------------
# Timestamp for log file naming
# ---------------------------------------------------------------------------
TIMESTAMP = datetime.now().strftime("%Y-%m-%d-%H%M%S")

# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def print_success(msg: str) -> None:
    console.print(f"[bold green]✔ {msg}[/bold green]")


def print_warning(msg: str) -> None:
    console.print(f"[bold yellow]⚠ {msg}[/bold yellow]")


def print_error(msg: str) -> None:
    console.print(f"[bold red]✖ {msg}[/bold red]")


def die(msg: str, code: int = 1) -> None:
    print_error(msg)
    sys.exit(code)


# ---------------------------------------------------------------------------
# File-based logging
# ---------------------------------------------------------------------------


def init_logging(
    prefix: str = "sqlpool",
    log_dir: Optional[Path] = None,
    debug: bool = False,
) -> Path:
    """Attach a timestamped file handler to the ``sqlpool`` logger. Returns the log file path."""
    if log_dir is None:
        from .config import settings
        log_dir = settings.log_dir

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{prefix}-{TIMESTAMP}.log"

    logger = logging.getLogger("sqlpool")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    fh = logging.FileHandler(log_file)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(fh)
    return log_file
