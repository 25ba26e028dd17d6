"""Structured logging configuration for refmatch using structlog.

Log events are snake_case names with key/value context, rendered either as
JSON lines or as human readable console output.
"""

import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for refmatch.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        # stdout is reserved for command output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )


# Global state for lazy initialization
_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    if os.getenv("REFMATCH_DISABLE_LOGGING") == "1":
        logging.disable(logging.CRITICAL)
        _logging_initialized = True
        return

    try:
        settings = get_settings()
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=settings.log_file,
            structured=settings.structured_logs,
            colorize=settings.debug_mode,
        )
    except (ValueError, OSError):
        # Broken environment configuration falls back to plain console logging
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class LogContext:
    """Context manager for temporary log context."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **kwargs) -> None:
        """Initialize with logger and context.

        Args:
            logger: Logger instance
            **kwargs: Context key-value pairs
        """
        self.logger = logger
        self.context = kwargs

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        """Enter context and bind values."""
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context; the bound logger simply goes out of scope."""
        pass


class PerformanceLogger:
    """Logger for performance metrics."""

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize performance logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)
        self.metrics: dict[str, list[float]] = {}

    def log_timing(self, operation: str, duration: float, **kwargs) -> None:
        """Log operation timing.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **kwargs: Additional context
        """
        self.metrics.setdefault(operation, []).append(duration)
        self.logger.debug("performance_timing", operation=operation, duration=duration, **kwargs)

    @contextmanager
    def timed(self, operation: str, **kwargs) -> Iterator[None]:
        """Time the enclosed block and log it under ``operation``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.log_timing(operation, time.perf_counter() - start, **kwargs)

    def get_stats(self, operation: str | None = None) -> dict[str, Any]:
        """Get performance statistics.

        Args:
            operation: Optional specific operation

        Returns:
            Statistics dict
        """
        if operation:
            values = self.metrics.get(operation)
            return self._summarize(values) if values else {}

        return {op: self._summarize(values) for op, values in self.metrics.items() if values}

    @staticmethod
    def _summarize(values: list[float]) -> dict[str, Any]:
        return {
            "count": len(values),
            "mean": sum(values) / len(values),
            "min": min(values),
            "max": max(values),
            "total": sum(values),
        }


_performance_logger: PerformanceLogger | None = None


def get_performance_logger() -> PerformanceLogger:
    """Get the shared performance logger, creating it on first use."""
    global _performance_logger
    if _performance_logger is None:
        _performance_logger = PerformanceLogger()
    return _performance_logger
