"""Shared utility functions for oneclick.

Provides Rich-based console reporting, small file-system helpers used by
every generator, and timestamp helpers for migration names and backup copies.
"""

from __future__ import annotations

import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

console = Console()

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file."""
    return Path(path).read_text(encoding="utf-8")


def write_file(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content* to *path*."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON, creating parent directories."""
    content = json.dumps(data, indent=4, ensure_ascii=False, default=str)
    return write_file(path, content)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def migration_timestamp(now: datetime | None = None) -> str:
    """Return a Laravel migration prefix such as ``2024_05_01_134501``."""
    return (now or datetime.now()).strftime("%Y_%m_%d_%H%M%S")


def unix_timestamp() -> int:
    """Seconds since the epoch, used for backup and export file names."""
    return int(time.time())


# ---------------------------------------------------------------------------
# Rich output helpers
#
# Message text is printed literally, never parsed as markup.
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule announcing a generation run."""
    console.print()
    console.print(Rule(Text(f" {title} ", style="bold bright_cyan"), style="bright_cyan"))
    console.print()


def print_summary_table(rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
    """Print a three-column step/status/detail table.

    Only the status column is parsed as markup.

    Args:
        rows: ``(step, status, detail)`` tuples.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Step", style="dim", no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail")

    for step, status, detail in rows:
        table.add_row(escape(step), status, escape(detail))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(escape(message), style="bold green")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(escape(message), style="bold red")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(escape(message), style="bold yellow")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(escape(message), style="cyan")
