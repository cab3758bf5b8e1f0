"""
GraphQL Client Module

This module sends GraphQL documents to the hosted API over HTTP and turns
transport and server failures into the application's exception types.
"""

from typing import Optional, Dict, Any

import requests

from config import settings
from services.access_mode import Credentials
from utils.exceptions import ApiError, NetworkError
from utils.logger import get_logger

logger = get_logger(__name__)


class GraphQLClient:
    """Minimal client for an AppSync-style GraphQL endpoint."""

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            endpoint: GraphQL URL, defaults to settings.APPSYNC_GRAPHQL_ENDPOINT
            timeout: Seconds per request, defaults to settings.REQUEST_TIMEOUT
            session: Optional requests.Session to reuse
        """
        self.endpoint = endpoint or settings.APPSYNC_GRAPHQL_ENDPOINT
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.http = session or requests.Session()

    def execute(self, query: str, credentials: Credentials,
                variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a query or mutation.

        Args:
            query: The GraphQL document
            credentials: Credentials for this call
            variables: Operation variables (optional)

        Returns:
            Dict[str, Any]: The ``data`` member of the response

        Raises:
            NetworkError: If the request could not reach the server
            ApiError: If the server answered with an error status or GraphQL errors
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(credentials.headers())
        payload = {"query": query, "variables": variables or {}}

        logger.debug(f"POST {self.endpoint} ({credentials.mode.value})")
        try:
            response = self.http.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise NetworkError(f"Could not reach GraphQL endpoint: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"GraphQL request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        errors = body.get("errors") if isinstance(body, dict) else None

        if response.status_code >= 400:
            message = self._error_message(errors) or f"HTTP {response.status_code}"
            raise ApiError(message, status_code=response.status_code, errors=errors)

        if not isinstance(body, dict):
            raise ApiError("Response was not a JSON object", status_code=response.status_code)

        if errors:
            raise ApiError(self._error_message(errors), status_code=response.status_code, errors=errors)

        return body.get("data") or {}

    @staticmethod
    def _error_message(errors) -> str:
        if not errors:
            return ""
        parts = []
        for error in errors:
            if not isinstance(error, dict):
                parts.append(str(error))
                continue
            error_type = error.get("errorType")
            message = error.get("message", "Unknown error")
            parts.append(f"{error_type}: {message}" if error_type else message)
        return "; ".join(parts)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http.close()
