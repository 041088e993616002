"""
Output utilities for libforge CLI using Rich
"""

import logging
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()


def print_success(message: str):
    """Print success message with green checkmark"""
    console.print(f"✓ {message}", style="bold green")


def print_warning(message: str):
    """Print warning message with yellow triangle"""
    console.print(f"⚠ {message}", style="bold yellow")


def print_info(message: str):
    """Print info message with blue icon"""
    console.print(f"ℹ {message}", style="bold blue")


def print_header(text: str):
    """Print section header"""
    console.print(f"\n[bold cyan]{text}[/bold cyan]")


def print_table(data: List[Dict[str, Any]], headers: List[str], title: Optional[str] = None):
    """
    Print data as a formatted table

    Args:
        data: List of dictionaries with row data
        headers: List of column headers
        title: Optional table title
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")

    for header in headers:
        table.add_column(header)

    for row in data:
        table.add_row(*[str(row.get(h, "")) for h in headers])

    console.print(table)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format"""
    if seconds < 1:
        return f"{seconds*1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Route libforge_core log records to the console through Rich.

    Args:
        verbose: Log DEBUG records (compiler commands, skipped dependencies)

    Returns:
        The configured libforge_core logger
    """
    logger = logging.getLogger("libforge_core")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    logger.addHandler(RichHandler(
        console=console,
        show_time=False,
        show_path=verbose,
        markup=False,
    ))
    return logger
