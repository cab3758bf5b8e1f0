"""
Auth Service Module

This module handles sign in and sign out against the Cognito user pool
that backs the blog. It owns the session; the rest of the application only
reads it through current_session().
"""

import time
from typing import Optional, Dict, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from config import settings
from data.models import Session
from utils.exceptions import ApiError, AuthenticationError, NetworkError
from utils.logger import get_logger

logger = get_logger(__name__)

# Cognito error codes that mean the credentials themselves were rejected
REJECTED_SIGN_IN_CODES = (
    "NotAuthorizedException",
    "UserNotFoundException",
    "UserNotConfirmedException",
    "PasswordResetRequiredException",
)

# Tokens are renewed this many seconds before they expire
TOKEN_REFRESH_MARGIN = 60


class AuthService:
    """Service for user pool authentication."""

    def __init__(self, client=None, app_client_id: Optional[str] = None):
        """
        Initialize the auth service with a cognito-idp client.

        Args:
            client: Optional boto3 cognito-idp client
            app_client_id: User pool app client id, defaults to settings
        """
        self.client = client or boto3.client("cognito-idp", region_name=settings.AWS_REGION)
        self.app_client_id = app_client_id or settings.COGNITO_APP_CLIENT_ID
        self._session = Session.anonymous()
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._expires_at = 0.0

    def current_session(self) -> Session:
        """
        Return the current session (anonymous when nobody is signed in).

        Tokens that are about to expire are renewed with the refresh token
        first. If the user pool refuses the refresh, the session falls back
        to anonymous.
        """
        if self._session.authenticated and time.time() >= self._expires_at - TOKEN_REFRESH_MARGIN:
            self._refresh_tokens()
        return self._session

    def sign_in(self, username: str, password: str) -> Session:
        """
        Sign in with a username and password.

        Args:
            username: User pool username or alias
            password: The user's password

        Returns:
            Session: The authenticated session

        Raises:
            AuthenticationError: If the user pool rejects the credentials
            ApiError: If the user pool fails the request for another reason
            NetworkError: If the user pool could not be reached
        """
        if not username or not password:
            raise AuthenticationError("Username and password are required")

        try:
            response = self.client.initiate_auth(
                ClientId=self.app_client_id,
                AuthFlow="USER_PASSWORD_AUTH",
                AuthParameters={"USERNAME": username, "PASSWORD": password},
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in REJECTED_SIGN_IN_CODES:
                logger.error(f"Sign in rejected for {username}: {code}")
                raise AuthenticationError(f"Sign in failed: {code}") from e
            logger.error(f"User pool error during sign in: {e}")
            raise ApiError(f"User pool error during sign in: {e}") from e
        except BotoCoreError as e:
            raise NetworkError(f"Could not reach the user pool: {e}") from e

        result = response.get("AuthenticationResult")
        if not result:
            # MFA, new password required and other challenges are not supported
            challenge = response.get("ChallengeName", "unknown")
            raise AuthenticationError(f"Sign in requires unsupported challenge: {challenge}")

        identity = self._lookup_username(result["AccessToken"]) or username

        self._refresh_token = None
        self._store_tokens(result, identity)
        logger.info(f"Signed in as {identity}")
        return self._session

    def sign_out(self) -> None:
        """
        Sign out the current user.

        Tokens are revoked on the user pool when possible; the local session
        is cleared either way.
        """
        if self._access_token:
            try:
                self.client.global_sign_out(AccessToken=self._access_token)
            except (ClientError, BotoCoreError) as e:
                logger.warning(f"Global sign out failed, clearing local session only: {e}")

        if self._session.authenticated:
            logger.info(f"Signed out {self._session.identity}")
        self._clear()

    def _refresh_tokens(self) -> None:
        if not self._refresh_token:
            logger.warning("Session expired and cannot be renewed, continuing anonymously")
            self._clear()
            return

        try:
            response = self.client.initiate_auth(
                ClientId=self.app_client_id,
                AuthFlow="REFRESH_TOKEN_AUTH",
                AuthParameters={"REFRESH_TOKEN": self._refresh_token},
            )
        except ClientError as e:
            logger.warning(f"Token refresh rejected, continuing anonymously: {e}")
            self._clear()
            return
        except BotoCoreError as e:
            logger.warning(f"Token refresh failed, keeping current tokens: {e}")
            return

        result = response.get("AuthenticationResult")
        if not result or "IdToken" not in result:
            logger.warning("Token refresh returned no tokens, continuing anonymously")
            self._clear()
            return

        self._store_tokens(result, self._session.identity)
        logger.debug(f"Renewed tokens for {self._session.identity}")

    def _store_tokens(self, result: Dict[str, Any], identity: str) -> None:
        # A refresh response carries no new refresh token; the old one stays valid
        self._access_token = result["AccessToken"]
        self._refresh_token = result.get("RefreshToken") or self._refresh_token
        self._expires_at = time.time() + result.get("ExpiresIn", 3600)
        self._session = Session(authenticated=True, identity=identity, id_token=result["IdToken"])

    def _clear(self) -> None:
        self._access_token = None
        self._refresh_token = None
        self._expires_at = 0.0
        self._session = Session.anonymous()

    def _lookup_username(self, access_token: str) -> Optional[str]:
        """Return the canonical pool username, which is what the API stores as owner."""
        try:
            user = self.client.get_user(AccessToken=access_token)
            return user.get("Username")
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not look up user name: {e}")
            return None
