"""
Blog Service Module

This module orchestrates the blog workflow: it reads the session, picks
credentials, calls the post repository and feeds the results into the
application state. Every mutation is followed by a full re-fetch of the list.
"""

from typing import Optional

from config import settings
from data.models import Post, Session
from data.protocols import PostStore
from data.state import (
    AppState, reduce,
    SessionChanged, PostsLoaded, PostViewed, ViewClosed, UpdateStarted, UpdateCancelled,
    BufferEdited, SubmitSucceeded, DeleteRequested, DeleteConfirmed, DeleteFailed, RequestFailed,
)
from services.access_mode import Credentials, select_credentials
from services.protocols import AuthProvider
from utils.exceptions import ApiError, NetworkError, NotAuthenticatedError
from utils.logger import get_logger

logger = get_logger(__name__)


class BlogService:
    """
    Main application service for the blog client.

    Holds the current AppState and replaces it through the reducer after
    every user action or backend response. Backend failures are recorded in
    ``state.error`` instead of being raised, and the edit buffer survives them.
    """

    def __init__(self, repository: PostStore, auth: AuthProvider, api_key: Optional[str] = None):
        self.repository = repository
        self.auth = auth
        self.api_key = api_key if api_key is not None else settings.APPSYNC_API_KEY
        self.state = AppState(session=auth.current_session())

    def _dispatch(self, event) -> AppState:
        self.state = reduce(self.state, event)
        return self.state

    def _credentials(self) -> Credentials:
        # Re-evaluated for every call; the session may have changed since the last one
        session = self.auth.current_session()
        if session != self.state.session:
            self._dispatch(SessionChanged(session))
        return select_credentials(session, self.api_key)

    def _fail(self, action: str, error: Exception) -> bool:
        message = f"{action} failed: {error}"
        logger.error(message)
        self._dispatch(RequestFailed(message))
        return False

    # =========================================================================
    # Session
    # =========================================================================

    @property
    def session(self) -> Session:
        return self.state.session

    def sign_in(self, username: str, password: str) -> Session:
        """Sign in through the auth provider and adopt the new session."""
        session = self.auth.sign_in(username, password)
        self._dispatch(SessionChanged(session))
        return session

    def sign_out(self) -> None:
        """Sign out and fall back to anonymous (API key) access."""
        self.auth.sign_out()
        self._dispatch(SessionChanged(self.auth.current_session()))

    def can_create(self) -> bool:
        """Creating posts is only enabled for signed-in users."""
        return self.auth.current_session().authenticated

    def can_modify(self, post: Post) -> bool:
        """Updating or deleting is only enabled for the post's owner."""
        session = self.auth.current_session()
        return session.authenticated and session.identity is not None and session.identity == post.owner

    def _require_create(self) -> None:
        if not self.can_create():
            raise NotAuthenticatedError("Sign in to create or update blog posts")

    def _require_modify(self, post: Post) -> None:
        self._require_create()
        if not self.can_modify(post):
            raise NotAuthenticatedError(f"Only the owner may change blog post {post.id}")

    # =========================================================================
    # Reading
    # =========================================================================

    def refresh(self) -> bool:
        """
        Re-fetch every post from the backend.

        Returns:
            bool: True if the list was loaded, False if the request failed
        """
        credentials = self._credentials()
        try:
            posts = self.repository.list(credentials)
        except (NetworkError, ApiError) as e:
            return self._fail("Loading blog posts", e)
        self._dispatch(PostsLoaded(tuple(posts)))
        return True

    def get_post(self, post_id: str) -> Optional[Post]:
        """Find a post in the current list."""
        return self.state.find_post(post_id)

    def view(self, post: Post) -> None:
        """Show a post in the detail pane."""
        self._dispatch(PostViewed(post))

    def close_view(self) -> None:
        self._dispatch(ViewClosed())

    # =========================================================================
    # Edit buffer
    # =========================================================================

    def start_update(self, post: Post) -> None:
        """Load a post into the edit buffer; any update in progress is abandoned."""
        self._require_modify(post)
        logger.debug(f"Starting update of blog post {post.id}")
        self._dispatch(UpdateStarted(post))

    def cancel_update(self) -> None:
        """Return the edit buffer to create mode with default values."""
        self._dispatch(UpdateCancelled())

    def edit_title(self, title: str) -> None:
        self._require_create()
        self._dispatch(BufferEdited(title=title))

    def edit_content(self, content: str) -> None:
        self._require_create()
        self._dispatch(BufferEdited(content=content))

    def submit(self) -> bool:
        """
        Submit the edit buffer as a create or an update, depending on its mode.

        Creating with an empty title or content does nothing and makes no
        backend call. On failure the buffer is kept so the user can retry.

        Returns:
            bool: True if the backend accepted the mutation
        """
        buffer = self.state.buffer
        if buffer.is_update:
            target = self.state.find_post(buffer.target_id)
            if target is not None:
                self._require_modify(target)
            else:
                self._require_create()
        else:
            self._require_create()
            if not buffer.title or not buffer.content:
                logger.warning("Blog post title and content are both required")
                return False

        credentials = self._credentials()
        try:
            if buffer.is_update:
                post = self.repository.update(credentials, buffer.target_id, buffer.title, buffer.content)
            else:
                post = self.repository.create(credentials, buffer.title, buffer.content)
        except (NetworkError, ApiError) as e:
            action = "Updating blog post" if buffer.is_update else "Creating blog post"
            return self._fail(action, e)

        if post is None:
            return False

        self._dispatch(SubmitSucceeded(post))
        self.refresh()
        return True

    def create(self, title: str, content: str) -> bool:
        """Fill the buffer in create mode and submit it."""
        self._require_create()
        self._dispatch(UpdateCancelled())
        self._dispatch(BufferEdited(title=title, content=content))
        return self.submit()

    def update(self, post: Post, title: str, content: str) -> bool:
        """Load a post into the buffer, apply new values and submit."""
        self.start_update(post)
        self._dispatch(BufferEdited(title=title, content=content))
        return self.submit()

    # =========================================================================
    # Deleting
    # =========================================================================

    def delete(self, post: Post) -> bool:
        """
        Delete a post.

        The post is hidden at once and marked pending. When the server
        confirms, it is dropped for good (clearing the detail pane if it was
        shown there) and the list is re-fetched. When the server refuses, the
        post reappears and the error is recorded.

        Returns:
            bool: True if the backend deleted the post
        """
        self._require_modify(post)
        credentials = self._credentials()
        self._dispatch(DeleteRequested(post.id))
        try:
            self.repository.delete(credentials, post.id)
        except (NetworkError, ApiError) as e:
            message = f"Deleting blog post failed: {e}"
            logger.error(message)
            self._dispatch(DeleteFailed(post.id, message))
            return False

        self._dispatch(DeleteConfirmed(post.id))
        self.refresh()
        return True

    def close(self) -> None:
        """Release backend resources held by the repository, if it holds any."""
        close = getattr(self.repository, "close", None)
        if close is not None:
            close()
