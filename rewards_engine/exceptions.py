"""
Standardized exception hierarchy for the rewards engine
Provides rich context, consistent logging, and user-friendly error messages

Rejected activity submissions are NOT exceptions: they come back as an
unsuccessful ActivityResult. Exceptions here cover startup configuration
problems and failures of the snapshot store collaborator.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class RewardsEngineError(Exception):
    """
    Base exception for all rewards engine errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise RewardsEngineError(
            message="Failed to save progress snapshot",
            operation="save_progress",
            context={"rewards": 4}
        )
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(RewardsEngineError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The rewards system is not properly configured. Please contact support.",
            context={"config_key": config_key, **(context or {})},
            **kwargs
        )


class CatalogError(ConfigurationError):
    """
    Reward or challenge catalog could not be loaded

    Examples:
    - Catalog file missing or not valid JSON
    - Unknown activity type or criteria type
    - Duplicate ids
    """

    def __init__(
        self,
        message: str,
        catalog_path: Optional[str] = None,
        entry_id: Optional[str] = None,
        **kwargs
    ):
        self.catalog_path = catalog_path
        self.entry_id = entry_id
        super().__init__(
            message=message,
            config_key="catalog",
            context={"catalog_path": catalog_path, "entry_id": entry_id},
            **kwargs
        )


# ==========================================
# Collaborator Errors
# ==========================================

class PersistenceError(RewardsEngineError):
    """Snapshot store failed to load or save engine state"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            user_message="We couldn't save your progress right now. It is kept for this session.",
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_store_exception(
    error: Exception,
    operation: str,
    context: Optional[Dict[str, Any]] = None
) -> RewardsEngineError:
    """
    Wrap exceptions raised by a snapshot store into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        context: Additional context

    Returns:
        PersistenceError, or the error itself if it already belongs to
        the hierarchy

    Example:
        try:
            await store.save_progress(snapshot)
        except Exception as e:
            raise wrap_store_exception(e, operation="save_progress")
    """
    if isinstance(error, RewardsEngineError):
        return error

    return PersistenceError(
        message=f"{operation} failed: {str(error)}",
        operation=operation,
        context=context,
        cause=error
    )
