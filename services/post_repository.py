"""
Post Repository Module

This module mediates every read and write of blog posts against the
GraphQL API. It keeps no state of its own: callers re-fetch the list after
each mutation to see the authoritative server state.
"""

from typing import Optional, List

from config import settings
from data.models import Post
from services.access_mode import Credentials
from services.graphql_client import GraphQLClient
from services.graphql_operations import (
    LIST_BLOG_POSTS, CREATE_BLOG_POST, UPDATE_BLOG_POST, DELETE_BLOG_POST
)
from utils.exceptions import ApiError
from utils.helpers import safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


class PostRepository:
    """Repository for BlogPost records backed by the GraphQL API."""

    def __init__(self, client: Optional[GraphQLClient] = None, page_size: Optional[int] = None):
        self.client = client or GraphQLClient()
        self.page_size = page_size or settings.LIST_PAGE_SIZE

    def list(self, credentials: Credentials) -> List[Post]:
        """
        Fetch every post, following the pagination cursor.

        Args:
            credentials: Credentials for the calls

        Returns:
            List[Post]: Posts in the order returned by the backend
        """
        posts: List[Post] = []
        next_token = None
        while True:
            data = self.client.execute(
                LIST_BLOG_POSTS,
                credentials,
                {"limit": self.page_size, "nextToken": next_token},
            )
            connection = safe_get(data, "listBlogPosts")
            if connection is None:
                raise ApiError("listBlogPosts returned no data")

            for item in connection.get("items") or []:
                # Items the caller may not read come back as null
                if item:
                    posts.append(Post.from_api(item))

            next_token = connection.get("nextToken")
            if not next_token:
                break

        logger.info(f"Fetched {len(posts)} blog posts")
        return posts

    def create(self, credentials: Credentials, title: str, content: str) -> Optional[Post]:
        """
        Create a post.

        Args:
            credentials: Credentials for the call
            title: Post title
            content: Post body

        Returns:
            Optional[Post]: The created post, or None if title or content is empty
        """
        if not title or not content:
            logger.warning("Ignoring create request with empty title or content")
            return None

        data = self.client.execute(
            CREATE_BLOG_POST,
            credentials,
            {"input": {"title": title, "content": content}},
        )
        post = self._post_from(data, "createBlogPost")
        logger.info(f"Created blog post {post.id}: {post.title}")
        return post

    def update(self, credentials: Credentials, post_id: str, title: str, content: str) -> Post:
        """
        Overwrite the title and content of a post.

        Args:
            credentials: Credentials for the call
            post_id: Identifier of the post to update
            title: New title
            content: New body

        Returns:
            Post: The server's copy after the update
        """
        data = self.client.execute(
            UPDATE_BLOG_POST,
            credentials,
            {"input": {"id": post_id, "title": title, "content": content}},
        )
        post = self._post_from(data, "updateBlogPost")
        logger.info(f"Updated blog post {post.id}")
        return post

    def delete(self, credentials: Credentials, post_id: str) -> str:
        """
        Delete a post.

        Args:
            credentials: Credentials for the call
            post_id: Identifier of the post to delete

        Returns:
            str: Identifier of the deleted post
        """
        data = self.client.execute(
            DELETE_BLOG_POST,
            credentials,
            {"input": {"id": post_id}},
        )
        deleted_id = safe_get(data, "deleteBlogPost", "id")
        if not deleted_id:
            raise ApiError(f"deleteBlogPost returned no data for {post_id}")
        logger.info(f"Deleted blog post {deleted_id}")
        return deleted_id

    @staticmethod
    def _post_from(data, operation: str) -> Post:
        item = safe_get(data, operation)
        if not item:
            raise ApiError(f"{operation} returned no data")
        return Post.from_api(item)

    def close(self) -> None:
        """Release the HTTP connection pool of the underlying client."""
        self.client.close()
