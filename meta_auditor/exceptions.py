"""
Custom Exception Classes for the SEO Meta Auditor

This module defines custom exceptions for consistent error responses on
both the admin pages and the JSON API.
"""

from typing import Any

from fastapi import status


class AuditorException(Exception):
    """Base exception class for all auditor exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(AuditorException):
    """Raised when the caller cannot be identified"""

    def __init__(self, message: str = "Authentication failed", details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, details=details or {})


class AuthorizationError(AuditorException):
    """Raised when user lacks permission for an action"""

    def __init__(self, message: str = "Permission denied.", required_permission: str | None = None):
        details = {"required_permission": required_permission} if required_permission else {}
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, details=details)


class CSRFError(AuditorException):
    """Raised when an action nonce is missing, forged, expired or reused"""

    def __init__(self, message: str = "Permission denied."):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


# ============================================================================
# Plugin Exceptions
# ============================================================================


class PluginNotFoundError(AuditorException):
    """Raised when the plugin directory has no entry for a slug"""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Plugin '{slug}' not found in the plugin directory",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"slug": slug},
        )


class PluginInstallError(AuditorException):
    """Raised when the plugin directory or the plugin package cannot be used"""

    def __init__(self, message: str, slug: str | None = None):
        details = {"slug": slug} if slug else {}
        super().__init__(message=message, status_code=status.HTTP_502_BAD_GATEWAY, details=details)
