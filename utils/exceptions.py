"""
Custom Exception Classes for the Blog Client

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""

from typing import Any, Dict, List, Optional


class BlogError(Exception):
    """Base exception for all blog client errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(BlogError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# Backend Errors
# =============================================================================

class NetworkError(BlogError):
    """Raised when a request never reached the server (connection failure, timeout)."""
    pass


class ApiError(BlogError):
    """Raised when the server rejected a request.

    Covers HTTP error statuses as well as GraphQL responses carrying an
    ``errors`` array (authorization failures, validation failures, not found).
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []

    @property
    def error_types(self) -> List[str]:
        """The ``errorType`` values reported by the GraphQL server."""
        return [e.get("errorType") for e in self.errors if isinstance(e, dict) and e.get("errorType")]


# =============================================================================
# Authentication Errors
# =============================================================================

class AuthenticationError(BlogError):
    """Raised when the user pool rejects a sign-in attempt."""
    pass


class NotAuthenticatedError(BlogError):
    """Raised when a mutating operation is attempted without permission.

    Either nobody is signed in, or the signed-in user does not own the post.
    """
    pass
