"""
Data Models for the Blog Client

This module contains data classes and models used throughout the application.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Dict, Any

from config import settings
from utils.helpers import parse_timestamp


@dataclass(frozen=True)
class Post:
    """A single blog entry as stored by the backend."""
    id: str                                  # Server-assigned, stable once assigned
    title: str
    content: str
    owner: Optional[str] = None              # Set by the backend from the caller's identity
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Post":
        """Build a Post from a GraphQL ``BlogPost`` object."""
        return cls(
            id=item["id"],
            title=item.get("title") or "",
            content=item.get("content") or "",
            owner=item.get("owner"),
            created_at=parse_timestamp(item.get("createdAt")),
            updated_at=parse_timestamp(item.get("updatedAt")),
        )


@dataclass(frozen=True)
class Session:
    """Authentication status supplied by the auth collaborator."""
    authenticated: bool = False
    identity: Optional[str] = None
    id_token: Optional[str] = field(default=None, repr=False)   # never printed

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()


@dataclass(frozen=True)
class EditBuffer:
    """
    Transient title/content being edited.

    ``target_id`` is None while creating and holds the post id while updating.
    """
    title: str = settings.DEFAULT_POST_TITLE
    content: str = settings.DEFAULT_POST_CONTENT
    target_id: Optional[str] = None

    @property
    def is_update(self) -> bool:
        return self.target_id is not None

    @classmethod
    def for_update(cls, post: Post) -> "EditBuffer":
        return cls(title=post.title, content=post.content, target_id=post.id)

    def with_title(self, title: str) -> "EditBuffer":
        return replace(self, title=title)

    def with_content(self, content: str) -> "EditBuffer":
        return replace(self, content=content)
