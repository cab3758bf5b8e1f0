"""
Shared Test Fixtures for the Blog Client

This module provides common fixtures used across all test modules.
Fixtures include mock HTTP responses, an in-memory post backend,
a fake auth provider, and data factories for test objects.
"""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import Post, Session
from services.access_mode import AuthMode, Credentials
from utils.exceptions import ApiError, NotAuthenticatedError


# =============================================================================
# Fake Collaborators
# =============================================================================

class FakePostStore:
    """
    In-memory stand-in for the GraphQL backend.

    Records every call in ``calls`` and enforces what the real backend
    enforces: writes need user pool credentials and only the owner may
    change a post. Set ``fail_with`` to make the next call raise.
    """

    def __init__(self, posts: Optional[List[Post]] = None):
        self.posts: List[Post] = list(posts or [])
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None
        self.tokens: Dict[str, str] = {}
        self._next_id = 1
        self.closed = False

    def _check(self, name, credentials, *args):
        self.calls.append((name, credentials) + args)
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    def _caller(self, credentials: Credentials) -> str:
        if credentials.mode is not AuthMode.AMAZON_COGNITO_USER_POOLS:
            raise ApiError("Unauthorized: Not Authorized to access createBlogPost", status_code=401)
        return self.tokens.get(credentials.secret, credentials.secret)

    def list(self, credentials):
        self._check("list", credentials)
        return list(self.posts)

    def create(self, credentials, title, content):
        if not title or not content:
            return None
        self._check("create", credentials, title, content)
        owner = self._caller(credentials)
        post = Post(
            id=f"post-{self._next_id}",
            title=title,
            content=content,
            owner=owner,
            created_at=datetime(2024, 1, 15, 10, self._next_id, tzinfo=timezone.utc),
        )
        self._next_id += 1
        self.posts.append(post)
        return post

    def update(self, credentials, post_id, title, content):
        self._check("update", credentials, post_id, title, content)
        owner = self._caller(credentials)
        for i, post in enumerate(self.posts):
            if post.id == post_id:
                if post.owner != owner:
                    raise ApiError("Unauthorized: Not Authorized to access updateBlogPost")
                updated = Post(post.id, title, content, post.owner, post.created_at)
                self.posts[i] = updated
                return updated
        raise ApiError("DynamoDB:ConditionalCheckFailedException: The conditional request failed")

    def delete(self, credentials, post_id):
        self._check("delete", credentials, post_id)
        owner = self._caller(credentials)
        for post in self.posts:
            if post.id == post_id:
                if post.owner != owner:
                    raise ApiError("Unauthorized: Not Authorized to access deleteBlogPost")
                self.posts.remove(post)
                return post_id
        raise ApiError("DynamoDB:ConditionalCheckFailedException: The conditional request failed")

    def backend_calls(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    def close(self):
        self.closed = True


class FakeAuth:
    """Auth provider that accepts any non-empty password."""

    def __init__(self, store: Optional[FakePostStore] = None):
        self._session = Session.anonymous()
        self.store = store

    def current_session(self):
        return self._session

    def sign_in(self, username, password):
        token = f"id-token-{username}"
        if self.store is not None:
            self.store.tokens[token] = username
        self._session = Session(authenticated=True, identity=username, id_token=token)
        return self._session

    def sign_out(self):
        self._session = Session.anonymous()


# =============================================================================
# Data Model Factories
# =============================================================================

@pytest.fixture
def post_factory():
    """
    Factory fixture for creating Post test objects.

    Usage:
        def test_post(post_factory):
            post = post_factory(id='p1', owner='alice')
    """
    counter = {"n": 0}

    def _create_post(
        id: Optional[str] = None,
        title: str = "Test Title",
        content: str = "Test content for unit testing.",
        owner: Optional[str] = "alice",
        created_at: Optional[datetime] = None,
    ) -> Post:
        counter["n"] += 1
        return Post(
            id=id or f"existing-{counter['n']}",
            title=title,
            content=content,
            owner=owner,
            created_at=created_at or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        )

    return _create_post


@pytest.fixture
def api_item_factory():
    """Factory fixture for BlogPost objects as they appear in GraphQL responses."""
    def _create_item(id: str = "abc-123", title: str = "Hello", content: str = "World",
                     owner: Optional[str] = "alice",
                     created_at: str = "2024-01-15T10:00:00.000Z",
                     updated_at: str = "2024-01-15T10:00:00.000Z") -> Dict[str, Any]:
        return {
            "__typename": "BlogPost",
            "id": id,
            "title": title,
            "content": content,
            "owner": owner,
            "createdAt": created_at,
            "updatedAt": updated_at,
        }

    return _create_item


# =============================================================================
# Backend Fixtures
# =============================================================================

@pytest.fixture
def store(post_factory):
    """In-memory backend holding one post owned by alice and one owned by bob."""
    return FakePostStore([
        post_factory(id="p-alice", title="Alice's post", owner="alice"),
        post_factory(id="p-bob", title="Bob's post", owner="bob"),
    ])


@pytest.fixture
def auth(store):
    return FakeAuth(store)


@pytest.fixture
def api_key_credentials():
    return Credentials(AuthMode.API_KEY, "test-api-key")


@pytest.fixture
def user_pool_credentials():
    return Credentials(AuthMode.AMAZON_COGNITO_USER_POOLS, "test-id-token")


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(
                status_code=200,
                json_data={'data': {...}},
            )

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        json_data: Optional[Dict[str, Any]] = None,
        text: str = '',
    ) -> MagicMock:
        import json

        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.ok = 200 <= status_code < 300
        mock_response.text = text or (json.dumps(json_data) if json_data is not None else '')

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        return mock_response

    return _create_response


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    app_logger = logging.getLogger("blog")
    original_level = app_logger.level
    app_logger.setLevel(logging.DEBUG)
    app_logger.addHandler(handler)

    yield handler.records

    app_logger.removeHandler(handler)
    app_logger.setLevel(original_level)
