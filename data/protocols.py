"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for data layer operations.
These protocols enable dependency injection for post storage,
making services testable without a real GraphQL backend.

Protocols defined:
- PostStore: Interface for reading and writing blog posts
"""

from typing import Protocol, Optional, List

from data.models import Post
from services.access_mode import Credentials


class PostStore(Protocol):
    """Protocol defining the interface for blog post storage operations.

    Implementations should provide methods for:
    - Listing every post in backend order
    - Creating, updating and deleting a single post

    Every call receives the credentials to use, so the caller decides the
    access mode per request.
    """

    def list(self, credentials: Credentials) -> List[Post]:
        """Fetch all posts.

        Raises:
            NetworkError: The request never reached the server.
            ApiError: The server rejected the request.
        """
        ...

    def create(self, credentials: Credentials, title: str, content: str) -> Optional[Post]:
        """Create a post.

        Returns:
            The created post, or None (without a backend call) when the
            title or the content is empty.
        """
        ...

    def update(self, credentials: Credentials, post_id: str, title: str, content: str) -> Post:
        """Overwrite the title and content of an existing post."""
        ...

    def delete(self, credentials: Credentials, post_id: str) -> str:
        """Delete a post and return its identifier."""
        ...
