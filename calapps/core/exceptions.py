"""
Custom exceptions for calapps.

Provides a small hierarchy so store failures and invalid credential
material can be told apart by callers.
"""

from typing import Any, Optional


class CalAppsException(Exception):
    """Base exception for all calapps errors."""

    def __init__(
        self,
        message: str,
        code: str = "CALAPPS_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for reporting."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class StoreError(CalAppsException):
    """A Configuration Store write failed."""

    def __init__(
        self,
        message: str,
        operation: str,
        code: str = "STORE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class AppKeysError(CalAppsException):
    """Credential material for an app is missing or malformed."""

    def __init__(self, slug: str, reason: str):
        super().__init__(
            message=f"Invalid keys for app {slug}: {reason}",
            code="APP_KEYS_INVALID",
            details={"slug": slug},
        )
        self.slug = slug
