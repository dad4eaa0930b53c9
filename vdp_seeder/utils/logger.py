"""
Logging utilities for the seeder.
Rich console output in normal runs, detailed file logs in verbose runs.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table


class SeederLogger:
    """
    Logger for the seeder with rich console output and optional debug log file.
    """

    def __init__(self, verbose: bool = False, debug_log_file: Optional[str] = None):
        self.verbose = verbose
        self.debug_log_file = debug_log_file
        self.console = Console(stderr=True)

        self._setup_logging()

    def _setup_logging(self):
        """Configure Python logging."""
        self.logger = logging.getLogger('vdp-seeder')
        self.logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

        # Remove existing handlers
        self.logger.handlers = []

        if self.verbose:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            console_handler.setLevel(logging.DEBUG)
        else:
            console_handler = RichHandler(console=self.console, rich_tracebacks=True)
            console_handler.setLevel(logging.INFO)

        self.logger.addHandler(console_handler)

        if self.debug_log_file:
            log_path = Path(self.debug_log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
            ))
            self.logger.addHandler(file_handler)

    def print_header(self, title: str):
        """Print a header/banner."""
        self.console.print(Panel(title, style="bold blue"))

    def print_section(self, title: str):
        """Print a section header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]")

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str, exc_info: bool = False):
        self.logger.error(message, exc_info=exc_info)

    def success(self, message: str):
        """Log success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_summary(self, total: int, successful: int, failed: int, duration: float):
        """Print completion summary."""
        self.print_section("Processing Complete")

        table = Table(show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="bold")
        table.add_row("Total sites", str(total))
        table.add_row("Successful", f"{successful}/{total}")
        table.add_row("Failed", str(failed))
        table.add_row("Duration", f"{duration:.1f}s")
        self.console.print(table)


# Global logger instance
_logger_instance: Optional[SeederLogger] = None


def get_logger() -> SeederLogger:
    """Get the global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SeederLogger()
    return _logger_instance


def init_logger(verbose: bool = False, debug_log_file: Optional[str] = None) -> SeederLogger:
    """Initialize the global logger."""
    global _logger_instance
    _logger_instance = SeederLogger(verbose=verbose, debug_log_file=debug_log_file)
    return _logger_instance
