"""Observability module for CharForge.

Provides structured logging for the harness, backend client and CLI.
"""

from charforge.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
)

__all__ = [
    "close_file_logging",
    "configure_logging",
    "get_logger",
    "get_logs_dir",
]
