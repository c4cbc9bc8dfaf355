"""
LoggingService - Centralized structured logging for rankmerge.

Provides consistent, machine-readable logging for the command-line layer
using structlog. The fusion engine itself does not log.

License: MIT
"""

import logging
import sys
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_FORMATS = ["json", "console"]


@dataclass
class LoggingConfig:
    """
    Configuration for LoggingService.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" or "console" for dev)
        output_stream: Output destination (default: sys.stderr, keeping
            stdout free for fused TREC output)

    Example:
        config = LoggingConfig(level="DEBUG", format="console")
    """

    level: str = "WARNING"
    format: str = "json"  # "json" or "console"
    output_stream: Any = sys.stderr


class LoggingService:
    """
    Centralized structured logging service using structlog.

    Example:
        # Setup logging once at startup
        LoggingService.configure_logging(level="INFO", format="json")

        # Get logger for a module
        logger = LoggingService.get_logger("rankmerge_cli")

        logger.info("merge_started", files=3, strategy="combmnz")
    """

    # Class-level state
    _configured: bool = False
    _log_level: str = "WARNING"
    _config: Optional[LoggingConfig] = None
    _loggers: Dict[str, structlog.BoundLogger] = {}

    @classmethod
    def configure_logging(
        cls, level: str = "WARNING", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Configure global structured logging.

        This should be called ONCE at startup before any logging.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format: Output format ("json" or "console")
            config: Optional LoggingConfig, takes precedence over level/format

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If called after logging already configured
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        cfg = config if config is not None else LoggingConfig(level=level, format=format)

        level_upper = cfg.level.upper()
        if level_upper not in VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {cfg.level}. "
                "Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )

        format_lower = cfg.format.lower()
        if format_lower not in VALID_FORMATS:
            raise ValueError(f"Invalid format: {cfg.format}. Must be 'json' or 'console'")

        cfg.level = level_upper
        cfg.format = format_lower

        cls._config = cfg
        cls._log_level = cfg.level

        structlog.configure(
            processors=cls._setup_processors(),
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream),
            cache_logger_on_first_use=False,
        )

        cls._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def get_logger(cls, name: str) -> structlog.BoundLogger:
        """
        Get a module/component-specific logger.

        Args:
            name: Logger name (typically module path)

        Returns:
            Cached BoundLogger for the name

        Raises:
            RuntimeError: If logging not configured yet
            ValueError: If name is empty
        """
        if not cls._configured:
            raise RuntimeError("Logging not configured. Call configure_logging() first.")

        if not name:
            raise ValueError("Logger name cannot be empty")

        if name not in cls._loggers:
            cls._loggers[name] = structlog.get_logger(name)

        return cls._loggers[name]

    @classmethod
    def log_error(
        cls,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        logger_name: str = "rankmerge",
        include_stack_trace: bool = False,
    ) -> None:
        """
        Log an error with its kind, message and error code.

        Args:
            error: Exception instance
            context: Additional context about where the error occurred
            logger_name: Which logger to use (default: "rankmerge")
            include_stack_trace: Whether to include the current stack trace

        Example:
            try:
                merged = engine.fuse(lists, strategy)
            except RankMergeError as e:
                LoggingService.log_error(e, context={"query_id": "q1"})
                raise
        """
        logger = cls.get_logger(logger_name)

        log_context: Dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
        }

        error_code = getattr(error, "error_code", None)
        if error_code:
            log_context["error_code"] = error_code

        correlation_id = getattr(error, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

        if context:
            log_context.update(context)

        if include_stack_trace:
            log_context["stack_trace"] = traceback.format_exc()

        logger.error("error_occurred", **log_context)

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        metadata: Optional[Dict[str, Any]] = None,
        logger_name: str = "rankmerge",
    ) -> None:
        """
        Log the duration of an operation.

        Args:
            operation: Operation name
            duration_ms: Duration in milliseconds
            metadata: Additional metrics (query count, document count, ...)
            logger_name: Which logger to use

        Raises:
            ValueError: If operation is empty or duration_ms < 0
        """
        if not operation:
            raise ValueError("operation cannot be empty")

        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        logger = cls.get_logger(logger_name)

        context: Dict[str, Any] = {"operation": operation, "duration_ms": duration_ms}
        if metadata:
            context.update(metadata)

        logger.info("performance_metric", **context)

    @classmethod
    def reset(cls) -> None:
        """Forget the current configuration so logging can be configured again."""
        cls._configured = False
        cls._log_level = "WARNING"
        cls._config = None
        cls._loggers = {}
        structlog.reset_defaults()

    @classmethod
    def _setup_processors(cls) -> list[Processor]:
        """
        Setup structlog processors based on configuration.

        Processors (in order):
            1. add_log_level: Add log level to context
            2. TimeStamper: Add ISO timestamp
            3. StackInfoRenderer: Render stack info if requested
            4. format_exc_info: Format exception info
            5. JSONRenderer or ConsoleRenderer: Final output format
        """
        processors: list[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if cls._config and cls._config.format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors
