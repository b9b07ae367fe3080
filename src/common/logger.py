"""Logging utilities with rich console output for the docs-lint CLI.

Every module logs through a standard ``logging.Logger`` whose handler renders
with rich, so rule output, summaries and tracebacks share one console.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("Running rule brokenLinks")
    logger.info("Files checked: [bold]12[/bold]")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from common.env import env

# Shared console so reporters and log records interleave correctly
console = Console()


def _rich_handler() -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses LOG_LEVEL from the environment or INFO.

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Documentation lint complete")
        Documentation lint complete
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel((level or env.log_level()).upper())
    logger.addHandler(_rich_handler())

    # Propagate so pytest caplog can capture records
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging once at the CLI entry point.

    Module loggers carry their own rich handler, so the root logger only
    receives the optional file handler.

    Args:
        level: Default logging level; LOG_LEVEL in the environment wins
        log_file: Optional file path to also log to a file
    """
    level = env.log_level(default=level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    set_level(level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def set_level(level: str) -> None:
    """Change the level of every docs_lint logger, e.g. for --verbose."""
    for name in list(logging.root.manager.loggerDict):
        if name == "docs_lint" or name.startswith("docs_lint."):
            logging.getLogger(name).setLevel(level.upper())


def progress(message: str) -> None:
    """Print a progress line without the logger prefix."""
    console.print(message)


def success(message: str) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Structure checks passed")
        ✓ Structure checks passed
    """
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning message with a yellow warning icon."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error message with a red X icon to stderr."""
    Console(stderr=True).print(f"[red]✗[/red] {message}")
