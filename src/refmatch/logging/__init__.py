"""Logging module for refmatch."""

from .logger import (
    LogContext,
    PerformanceLogger,
    get_logger,
    get_performance_logger,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_performance_logger",
    "LogContext",
    "PerformanceLogger",
]
