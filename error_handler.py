"""
Centralized error handling utilities.

This module configures application logging and provides the input error type,
decorators for UI handlers and an operation context for consistent logging.
"""

import functools
import logging
from datetime import datetime
from typing import Callable, Optional, Any

from constants import Config, UIConstants, ErrorMessages

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(Config.LOG_FILE),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


class InputDataError(ValueError):
    """
    Raised before the transformation runs when required input is missing or
    unusable: no upload, wrong file extension, malformed GSTIN, bad period,
    or a return that produced no data at all.
    """


# Exception type -> user-facing description, most specific first
ERROR_DESCRIPTIONS = (
    (FileNotFoundError, ErrorMessages.FILE_NOT_FOUND),
    (PermissionError, ErrorMessages.PERMISSION_DENIED),
    (ValueError, "Invalid data in the settlement report"),
)


def describe_error(error: Exception) -> str:
    """Dialog text for an exception raised while building or exporting a return."""
    if isinstance(error, InputDataError):
        return f"{UIConstants.ICON_WARNING} {error}"
    for error_type, description in ERROR_DESCRIPTIONS:
        if isinstance(error, error_type):
            return f"{UIConstants.ICON_ERROR} {description}\n\nDetails: {error}"
    return f"{UIConstants.ICON_ERROR} An error occurred\n\nDetails: {error}"


def handle_ui_errors(success_message: Optional[str] = None, error_title: str = "Error") -> Callable:
    """
    Decorator for UI handlers: shows a success or error dialog and mirrors it
    to the window log. Input errors are logged as warnings, anything else with
    a traceback.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self: Any, *args, **kwargs):
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                if isinstance(e, InputDataError):
                    logger.warning(f"Input error in {func.__name__}: {e}")
                else:
                    logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
                _show_error_dialog(self, error_title, describe_error(e))
                return None

            if success_message:
                from PySide6.QtWidgets import QMessageBox, QWidget
                QMessageBox.information(self if isinstance(self, QWidget) else None,
                                        "Success", success_message)
                if hasattr(self, 'log'):
                    self.log(success_message)
            return result

        return wrapper
    return decorator


def handle_export_errors(file_type: str = "File") -> Callable:
    """Export handlers: "<file_type> exported successfully" / "<file_type> Export Error"."""
    return handle_ui_errors(
        success_message=f"{UIConstants.ICON_SUCCESS} {file_type} exported successfully",
        error_title=f"{file_type} Export Error",
    )


def _show_error_dialog(parent: Any, title: str, message: str) -> None:
    from PySide6.QtWidgets import QMessageBox, QWidget
    QMessageBox.critical(parent if isinstance(parent, QWidget) else None, title, message)

    if hasattr(parent, 'log'):
        parent.log(message)


def log_operation(operation_name: str, period: str = "", row_count: Optional[int] = None,
                  output_path: str = "") -> str:
    """
    Log one completed filing operation and return the logged line.

    Example:
        >>> log_operation("GSTR-1 JSON", "042024", 1200, "gstr1-b2cs-April-2024.json")
        'GSTR-1 JSON [042024] - 1200 rows -> gstr1-b2cs-April-2024.json'
    """
    message = operation_name
    if period:
        message += f" [{period}]"
    if row_count is not None:
        message += f" - {row_count} rows"
    if output_path:
        message += f" -> {output_path}"
    logger.info(message)
    return message


# =============================================================================
# CONTEXT MANAGER FOR OPERATIONS
# =============================================================================

class OperationContext:
    """
    Context manager for operations with automatic logging.

    Example:
        >>> with OperationContext("Loading forward report", log=self.log):
        ...     rows = load_rows(path)
    """

    def __init__(self, operation_name: str, log: Optional[Callable[[str], None]] = None):
        """
        Args:
            operation_name: Name of the operation
            log: Optional callable receiving status lines (e.g. the window log pane)
        """
        self.operation_name = operation_name
        self.log = log
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()

        msg = f"{UIConstants.ICON_LOADING} Starting: {self.operation_name}"
        logger.info(msg)
        if self.log:
            self.log(msg)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        End operation with logging.

        Returns:
            False to propagate exceptions (don't suppress)
        """
        duration = datetime.now() - self.start_time if self.start_time else None

        if exc_type is None:
            msg = f"{UIConstants.ICON_SUCCESS} Completed: {self.operation_name}"
            if duration:
                msg += f" (took {duration.total_seconds():.2f}s)"
            logger.info(msg)
        else:
            msg = f"{UIConstants.ICON_ERROR} Failed: {self.operation_name} - {exc_val}"
            logger.error(msg, exc_info=True)
        if self.log:
            self.log(msg)

        return False  # Don't suppress exceptions
