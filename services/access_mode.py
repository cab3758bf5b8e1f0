"""
Access Mode Selection

The GraphQL API accepts two kinds of credentials: the public API key, which
is allowed to read posts, and a user pool identity token, which is required
to create, update or delete them. The choice is made per call from the
session and passed explicitly to the repository.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from data.models import Session


class AuthMode(str, Enum):
    """Credential modes understood by the GraphQL endpoint."""
    API_KEY = "API_KEY"
    AMAZON_COGNITO_USER_POOLS = "AMAZON_COGNITO_USER_POOLS"


@dataclass(frozen=True)
class Credentials:
    """Credentials for a single GraphQL call."""
    mode: AuthMode
    secret: str = field(repr=False)

    def headers(self) -> Dict[str, str]:
        """HTTP headers that authorize a request in this mode."""
        if self.mode is AuthMode.API_KEY:
            return {"x-api-key": self.secret}
        return {"Authorization": self.secret}


def select_credentials(session: Optional[Session], api_key: str) -> Credentials:
    """
    Pick the credentials for the next call.

    Args:
        session: Current session, or None when nobody signed in.
        api_key: The public API key used for anonymous reads.

    Returns:
        Credentials: user pool credentials when the session is authenticated
        and holds a token, API key credentials otherwise.
    """
    if session is not None and session.authenticated and session.id_token:
        return Credentials(AuthMode.AMAZON_COGNITO_USER_POOLS, session.id_token)
    return Credentials(AuthMode.API_KEY, api_key)
