# backend/modules/analytics/exceptions.py

"""
Custom exceptions for analytics module.

Provides specific exception types for better error handling and debugging.
"""

from typing import Any, Dict, Optional


class AnalyticsBaseException(Exception):
    """Base exception for all analytics errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidQueryError(AnalyticsBaseException):
    """Raised when the assistant receives something that is not a usable query"""

    def __init__(self, value: Any = None):
        details = {"received_type": type(value).__name__}
        super().__init__("Invalid query", "INVALID_QUERY", details)


class DuplicateIntentError(AnalyticsBaseException):
    """Raised when two assistant rules are registered under the same name"""

    def __init__(self, name: str):
        super().__init__(
            f"Intent '{name}' is already registered", "DUPLICATE_INTENT", {"name": name}
        )
