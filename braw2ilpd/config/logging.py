"""
Logging configuration for the braw2ilpd tool.

Sets up structured logging with console output and optional file output.
"""

import os
import datetime
import logging
import structlog
from rich.console import Console
from rich.logging import RichHandler
from logging import FileHandler
from typing import Tuple, Any, Optional

# Initialize console for rich output
console = Console()

# Marker attribute so repeated setup calls replace our own handlers only
_HANDLER_TAG = "_braw2ilpd_handler"


def setup_logging(log_dir: Optional[str] = None, verbose: bool = False) -> Tuple[Any, Optional[str]]:
    """
    Setup logging configurations for console and, optionally, file output.

    Args:
        log_dir: Directory for the per-run log file; no file is written when None
        verbose: Lower the threshold from INFO to DEBUG

    Returns:
        Tuple containing:
            - logger: The configured logger
            - log_file: Path to the log file, or None
    """
    level = logging.DEBUG if verbose else logging.INFO

    # Configure structlog to integrate with standard logging
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f", utc=False),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(min_level=level),
        context_class=dict,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
    )

    std_root_logger = logging.getLogger()
    for handler in list(std_root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            std_root_logger.removeHandler(handler)
            handler.close()

    # Console Handler (using Rich for pretty output)
    rich_console_handler = RichHandler(console=console, rich_tracebacks=True, markup=False, show_path=False)
    rich_console_handler.setFormatter(formatter)
    rich_console_handler.setLevel(level)
    setattr(rich_console_handler, _HANDLER_TAG, True)
    std_root_logger.addHandler(rich_console_handler)

    log_file = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"braw2ilpd_{timestamp}.log")

        # File Handler (plain text)
        file_log_handler = FileHandler(log_file, mode='w', encoding='utf-8')
        file_log_handler.setFormatter(formatter)
        file_log_handler.setLevel(level)
        setattr(file_log_handler, _HANDLER_TAG, True)
        std_root_logger.addHandler(file_log_handler)

    std_root_logger.setLevel(level)

    # Create a logger instance using structlog
    logger = structlog.get_logger(__name__)
    logger.debug("Logging configured", log_file=log_file, verbose=verbose)

    return logger, log_file
