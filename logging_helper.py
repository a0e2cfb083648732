"""
Unified logging helper for consistent logging across the service.

This module provides a centralized logging system so every module logs with
the same format and handlers.

Usage:
    from logging_helper import LoggingHelper, LogType

    # Get a logger instance
    logger = LoggingHelper.get_logger(LogType.MAIN)
    logger.info("Standard logging")

    # Use helper methods for common patterns
    LoggingHelper.log_error_with_trace("Operation failed", exception)
    LoggingHelper.log_export("patients", "csv", 42)
"""

import logging
import os
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


class LogType(Enum):
    """Enum for different log types in the application."""
    MAIN = "clinic_tables"
    EXPORT = "clinic_tables.exports"


class LoggingHelper:
    """
    Unified logging helper for consistent logging across the service.

    Manages the application loggers and provides helper methods for common
    logging patterns.
    """

    _loggers = {}
    _initialized = False
    _log_dir: Optional[Path] = None

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None):
        """
        Initialize all loggers. Called once at application startup.

        Args:
            log_dir: Directory for log files. Falls back to the LOG_DIR
                     environment variable; console only when neither is set.
        """
        if cls._initialized:
            return

        log_dir = log_dir or os.getenv('LOG_DIR')
        cls._log_dir = Path(log_dir) if log_dir else None

        cls._loggers[LogType.MAIN] = cls._setup_main_logger()
        cls._loggers[LogType.EXPORT] = cls._setup_export_logger()

        cls._initialized = True

    @classmethod
    def get_logger(cls, log_type: LogType = LogType.MAIN) -> logging.Logger:
        """
        Get a logger instance by type.

        Args:
            log_type: The type of logger to retrieve

        Returns:
            The requested logger instance
        """
        if not cls._initialized:
            cls.initialize()
        return cls._loggers.get(log_type, cls._loggers[LogType.MAIN])

    # =============================================================================
    # Helper methods for common logging patterns
    # =============================================================================

    @classmethod
    def log_error_with_trace(cls, message: str, exception: Exception,
                             log_type: LogType = LogType.MAIN):
        """
        Log an error with full traceback in a single call.

        Args:
            message: Error message to log
            exception: The exception that occurred
            log_type: Which logger to use
        """
        logger = cls.get_logger(log_type)
        logger.error(f"{message}: {exception}", exc_info=True)

    @classmethod
    def log_operation(cls, operation: str, status: str = "started",
                      log_type: LogType = LogType.MAIN):
        """
        Log operation start/completion with consistent formatting.

        Args:
            operation: Name of the operation
            status: Status - "started" or "completed"
            log_type: Which logger to use
        """
        logger = cls.get_logger(log_type)
        marker = "▶" if status == "started" else "✓"
        logger.info(f"{marker} {operation.capitalize()} {status}")

    @classmethod
    def log_export(cls, table: str, export_format: str, row_count: int,
                   notice: Optional[str] = None):
        """
        Log one export to the export log.

        Args:
            table: Table title or resource name
            export_format: csv, pdf or print
            row_count: Number of exported rows
            notice: Optional fallback notice shown to the user
        """
        logger = cls.get_logger(LogType.EXPORT)
        message = f"{table} | {export_format} | {row_count} rows"
        if notice:
            message += f" | {notice}"
        logger.info(message)

    # =============================================================================
    # Private logger setup methods
    # =============================================================================

    @classmethod
    def _file_handler(cls, filename: str, fmt: str) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            cls._log_dir / filename,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=3,
            encoding='utf-8'
        )
        handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
        return handler

    @classmethod
    def _setup_main_logger(cls) -> logging.Logger:
        """Configure and return the main application logger."""
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

        logger = logging.getLogger(LogType.MAIN.value)
        logger.setLevel(getattr(logging, log_level, logging.INFO))
        logger.handlers = []
        logger.propagate = False

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
        logger.addHandler(console_handler)

        if cls._log_dir is None:
            return logger

        try:
            cls._log_dir.mkdir(parents=True, exist_ok=True)
            logger.addHandler(cls._file_handler(
                'clinic_tables.log', '%(asctime)s | %(levelname)s | %(message)s'))

            error_handler = cls._file_handler(
                'errors.log', '%(asctime)s | %(levelname)s | %(message)s')
            error_handler.setLevel(logging.ERROR)
            logger.addHandler(error_handler)

        except OSError as e:
            logger.warning(f"Could not create file handlers: {e}")

        return logger

    @classmethod
    def _setup_export_logger(cls) -> logging.Logger:
        """Configure the export history logger."""
        logger = logging.getLogger(LogType.EXPORT.value)
        logger.setLevel(logging.INFO)
        logger.handlers = []
        logger.propagate = False

        if cls._log_dir is not None:
            try:
                cls._log_dir.mkdir(parents=True, exist_ok=True)
                logger.addHandler(cls._file_handler('exports.log', '%(asctime)s | %(message)s'))
                return logger
            except OSError as e:
                cls._loggers[LogType.MAIN].warning(f"Could not create export file handler: {e}")

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('[EXPORT] %(message)s'))
        logger.addHandler(console_handler)
        return logger


# Initialize loggers on module import
LoggingHelper.initialize()

logger = LoggingHelper.get_logger(LogType.MAIN)
export_logger = LoggingHelper.get_logger(LogType.EXPORT)
