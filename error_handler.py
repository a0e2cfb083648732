"""
Standardized error handling utilities for consistent error management.
"""

import os
from typing import Optional, Any, Callable
from logging_helper import logger
from constants import FALSE_VALUES


class ClinicTablesError(Exception):
    """Base exception for all clinic tables errors."""
    pass


class ValidationError(ClinicTablesError):
    """Data validation errors (bad column specs, bad parameters)."""
    pass


class ConfigurationError(ClinicTablesError):
    """Configuration-related errors."""
    pass


class ExportError(ClinicTablesError):
    """Raised when a collection cannot be serialized for export."""
    pass


class NothingToExportError(ExportError):
    """Raised when an export is requested for an empty collection."""

    def __init__(self, message: str = "No data to export"):
        self.message = message
        super().__init__(self.message)


class APIError(ClinicTablesError):
    """
    Raised when the clinic REST API answers with an error status or
    cannot be reached.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(APIError):
    """
    Raised on 401 from the clinic REST API.

    Handling: the client session has already been cleared; the caller should
    send the user back to the login surface.
    """

    def __init__(self, message: str = "Session expired, please log in again"):
        super().__init__(message, status_code=401)


def _extract_clean_error_message(exc: Exception) -> str:
    """
    Extract a clean, human-readable error message from an exception.

    For requests HTTPError exceptions this prefers the clinic API's
    `{success: false, message}` envelope over the raw response body.

    Args:
        exc: The exception to extract message from

    Returns:
        Clean error message string
    """
    response = getattr(exc, 'response', None)
    if response is not None:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get('message'):
            return str(payload['message'])
        status = getattr(response, 'status_code', None)
        reason = getattr(response, 'reason', None)
        if status and reason:
            return f"HTTP {status}: {reason}"

    message = getattr(exc, 'message', None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def log_and_suppress(
    exc: Exception,
    message: str,
    *args,
    level: str = "error",
    return_value: Any = None,
    log_traceback: bool = True
) -> Any:
    """
    Log an exception with context and return a default value.

    Args:
        exc: The exception to log
        message: Log message with format placeholders
        *args: Arguments for message formatting
        level: Log level (error, warning, debug)
        return_value: Value to return after logging
        log_traceback: Whether to log full traceback (default True)

    Returns:
        The specified return_value
    """
    log_func = getattr(logger, level, logger.error)
    clean_error_msg = _extract_clean_error_message(exc)
    log_func(f"{message}: {clean_error_msg}", *args)
    if log_traceback:
        logger.debug("Exception details", exc_info=True)
    return return_value


def log_and_reraise(
    exc: Exception,
    message: str,
    *args,
    level: str = "error",
    as_type: Optional[type] = None
) -> None:
    """
    Log an exception with context and re-raise it.

    Args:
        exc: The exception to log
        message: Log message with format placeholders
        *args: Arguments for message formatting
        level: Log level (error, warning, critical)
        as_type: Optional exception type to raise instead

    Raises:
        The original exception or as_type if specified
    """
    log_func = getattr(logger, level, logger.error)
    clean_error_msg = _extract_clean_error_message(exc)
    log_func(f"{message}: {clean_error_msg}", *args)
    logger.debug("Exception details", exc_info=True)

    if as_type:
        raise as_type(f"{message}: {clean_error_msg}") from exc
    raise exc


def validate_environment_variable(
    var_name: str,
    default: Any,
    validator: Optional[Callable[[Any], bool]] = None,
    converter: Optional[Callable[[str], Any]] = None
) -> Any:
    """
    Safely get and validate an environment variable.

    Args:
        var_name: Name of the environment variable
        default: Default value if not set or invalid
        validator: Optional validation function
        converter: Optional conversion function (e.g., int, float)

    Returns:
        The validated and converted environment variable value
    """
    raw_value = os.getenv(var_name)

    if raw_value is None:
        logger.debug(f"Environment variable {var_name} not set, using default: {default}")
        return default

    if converter:
        try:
            value = converter(raw_value)
        except (ValueError, TypeError) as exc:
            logger.warning(
                f"Invalid {var_name}='{raw_value}': {exc}. Using default: {default}"
            )
            return default
    else:
        value = raw_value

    if validator and not validator(value):
        logger.warning(
            f"Invalid {var_name}='{value}' failed validation. Using default: {default}"
        )
        return default

    logger.debug(f"Using {var_name}={value}")
    return value


def env_flag(var_name: str, default: bool = False) -> bool:
    """Read a boolean environment variable using FALSE_VALUES."""
    raw_value = os.getenv(var_name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() not in FALSE_VALUES
