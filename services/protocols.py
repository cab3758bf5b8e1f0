"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for services used by the
blog client. These protocols enable loose coupling, dependency injection,
and easier testing.

Protocols defined:
- AuthProvider: Interface for the external authentication collaborator
"""

from typing import Protocol

from data.models import Session


class AuthProvider(Protocol):
    """Protocol defining the interface for authentication services.

    The session is owned by the provider. Callers read it through
    current_session() and never mutate it.
    """

    def current_session(self) -> Session:
        """Return the current session.

        Returns:
            Session with authenticated=False when nobody is signed in.
        """
        ...

    def sign_in(self, username: str, password: str) -> Session:
        """Sign a user in.

        Args:
            username: The user's name.
            password: The user's password.

        Returns:
            The authenticated session.
        """
        ...

    def sign_out(self) -> None:
        """Sign the current user out."""
        ...
