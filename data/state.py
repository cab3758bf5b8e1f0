"""
Application State for the Blog Client

All state the front end shows lives in one immutable AppState value.
Changes happen only through reduce(state, event), which returns a new state.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, FrozenSet, Callable, Dict, Type

from data.models import Post, Session, EditBuffer


@dataclass(frozen=True)
class AppState:
    """Snapshot of everything the user sees."""
    session: Session = field(default_factory=Session.anonymous)
    posts: Tuple[Post, ...] = ()                     # Backend order, including pending deletes
    viewed: Optional[Post] = None                    # Post shown in the detail pane
    buffer: EditBuffer = field(default_factory=EditBuffer)
    pending_deletes: FrozenSet[str] = frozenset()
    error: Optional[str] = None                      # Last failure, shown until the next success

    @property
    def visible_posts(self) -> Tuple[Post, ...]:
        """Posts to display: pending deletes are hidden."""
        return tuple(p for p in self.posts if p.id not in self.pending_deletes)

    def find_post(self, post_id: str) -> Optional[Post]:
        for post in self.posts:
            if post.id == post_id:
                return post
        return None


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class SessionChanged:
    session: Session


@dataclass(frozen=True)
class PostsLoaded:
    posts: Tuple[Post, ...]


@dataclass(frozen=True)
class PostViewed:
    post: Post


@dataclass(frozen=True)
class ViewClosed:
    pass


@dataclass(frozen=True)
class UpdateStarted:
    post: Post


@dataclass(frozen=True)
class UpdateCancelled:
    pass


@dataclass(frozen=True)
class BufferEdited:
    title: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class SubmitSucceeded:
    post: Post


@dataclass(frozen=True)
class DeleteRequested:
    post_id: str


@dataclass(frozen=True)
class DeleteConfirmed:
    post_id: str


@dataclass(frozen=True)
class DeleteFailed:
    post_id: str
    message: str


@dataclass(frozen=True)
class RequestFailed:
    message: str


# =============================================================================
# Reducer
# =============================================================================

def _session_changed(state: AppState, event: SessionChanged) -> AppState:
    # A pending update belongs to the previous user
    buffer = state.buffer if event.session.identity == state.session.identity else EditBuffer()
    return replace(state, session=event.session, buffer=buffer, error=None)


def _posts_loaded(state: AppState, event: PostsLoaded) -> AppState:
    posts = tuple(event.posts)
    viewed = state.viewed
    if viewed is not None:
        fresh = next((p for p in posts if p.id == viewed.id), None)
        viewed = fresh or viewed
    return replace(state, posts=posts, viewed=viewed, error=None)


def _post_viewed(state: AppState, event: PostViewed) -> AppState:
    return replace(state, viewed=event.post)


def _view_closed(state: AppState, event: ViewClosed) -> AppState:
    return replace(state, viewed=None)


def _update_started(state: AppState, event: UpdateStarted) -> AppState:
    return replace(state, buffer=EditBuffer.for_update(event.post))


def _update_cancelled(state: AppState, event: UpdateCancelled) -> AppState:
    return replace(state, buffer=EditBuffer())


def _buffer_edited(state: AppState, event: BufferEdited) -> AppState:
    buffer = state.buffer
    if event.title is not None:
        buffer = buffer.with_title(event.title)
    if event.content is not None:
        buffer = buffer.with_content(event.content)
    return replace(state, buffer=buffer)


def _submit_succeeded(state: AppState, event: SubmitSucceeded) -> AppState:
    viewed = state.viewed
    if viewed is not None and viewed.id == event.post.id:
        viewed = event.post
    return replace(state, buffer=EditBuffer(), viewed=viewed, error=None)


def _delete_requested(state: AppState, event: DeleteRequested) -> AppState:
    return replace(state, pending_deletes=state.pending_deletes | {event.post_id})


def _delete_confirmed(state: AppState, event: DeleteConfirmed) -> AppState:
    viewed = state.viewed
    if viewed is not None and viewed.id == event.post_id:
        viewed = None
    buffer = state.buffer
    if buffer.target_id == event.post_id:
        buffer = EditBuffer()
    return replace(
        state,
        posts=tuple(p for p in state.posts if p.id != event.post_id),
        pending_deletes=state.pending_deletes - {event.post_id},
        viewed=viewed,
        buffer=buffer,
        error=None,
    )


def _delete_failed(state: AppState, event: DeleteFailed) -> AppState:
    # Dropping the pending mark puts the post back where it was
    return replace(
        state,
        pending_deletes=state.pending_deletes - {event.post_id},
        error=event.message,
    )


def _request_failed(state: AppState, event: RequestFailed) -> AppState:
    return replace(state, error=event.message)


_HANDLERS: Dict[Type, Callable] = {
    SessionChanged: _session_changed,
    PostsLoaded: _posts_loaded,
    PostViewed: _post_viewed,
    ViewClosed: _view_closed,
    UpdateStarted: _update_started,
    UpdateCancelled: _update_cancelled,
    BufferEdited: _buffer_edited,
    SubmitSucceeded: _submit_succeeded,
    DeleteRequested: _delete_requested,
    DeleteConfirmed: _delete_confirmed,
    DeleteFailed: _delete_failed,
    RequestFailed: _request_failed,
}


def reduce(state: AppState, event) -> AppState:
    """
    Apply an event to a state.

    Args:
        state: The current state
        event: One of the event classes defined in this module

    Returns:
        AppState: The new state; the input is left untouched

    Raises:
        TypeError: If the event type is unknown
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown event: {event!r}")
    return handler(state, event)
