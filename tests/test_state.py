"""
Tests for the application state reducer.
"""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import EditBuffer, Session
from data.state import (
    AppState, reduce,
    SessionChanged, PostsLoaded, PostViewed, ViewClosed, UpdateStarted, UpdateCancelled,
    BufferEdited, SubmitSucceeded, DeleteRequested, DeleteConfirmed, DeleteFailed, RequestFailed,
)


@pytest.fixture
def loaded(post_factory):
    posts = (
        post_factory(id="a", title="A"),
        post_factory(id="b", title="B"),
        post_factory(id="c", title="C"),
    )
    return reduce(AppState(), PostsLoaded(posts))


class TestEditBuffer:
    """Tests for the create/update state machine."""

    def test_default_is_create(self):
        state = AppState()
        assert state.buffer.is_update is False
        assert state.buffer == EditBuffer(title="Blog Title", content="Blog Content")

    def test_update_started_prefills_buffer(self, loaded):
        post = loaded.find_post("b")

        state = reduce(loaded, UpdateStarted(post))

        assert state.buffer.is_update
        assert state.buffer.target_id == "b"
        assert (state.buffer.title, state.buffer.content) == (post.title, post.content)

    def test_starting_another_update_abandons_first(self, loaded):
        state = reduce(loaded, UpdateStarted(loaded.find_post("a")))
        state = reduce(state, BufferEdited(title="half-finished"))

        state = reduce(state, UpdateStarted(loaded.find_post("b")))

        assert state.buffer.target_id == "b"
        assert state.buffer.title == "B"

    def test_cancel_returns_to_create(self, loaded):
        state = reduce(loaded, UpdateStarted(loaded.find_post("a")))

        state = reduce(state, UpdateCancelled())

        assert state.buffer == EditBuffer()

    def test_buffer_edited_changes_only_given_fields(self):
        state = reduce(AppState(), BufferEdited(title="New title"))
        assert state.buffer.title == "New title"
        assert state.buffer.content == "Blog Content"

    def test_submit_resets_buffer(self, loaded, post_factory):
        state = reduce(loaded, UpdateStarted(loaded.find_post("a")))

        state = reduce(state, SubmitSucceeded(post_factory(id="a", title="Changed")))

        assert state.buffer == EditBuffer()

    def test_failure_keeps_buffer(self, loaded):
        state = reduce(loaded, UpdateStarted(loaded.find_post("a")))
        state = reduce(state, BufferEdited(content="precious draft"))

        state = reduce(state, RequestFailed("Updating blog post failed: boom"))

        assert state.buffer.content == "precious draft"
        assert state.buffer.target_id == "a"
        assert state.error == "Updating blog post failed: boom"


class TestDetailView:

    def test_view_and_close(self, loaded):
        state = reduce(loaded, PostViewed(loaded.find_post("a")))
        assert state.viewed.id == "a"

        assert reduce(state, ViewClosed()).viewed is None

    def test_submit_refreshes_viewed_copy(self, loaded, post_factory):
        state = reduce(loaded, PostViewed(loaded.find_post("a")))

        state = reduce(state, SubmitSucceeded(post_factory(id="a", title="Changed", content="New body")))

        assert state.viewed.title == "Changed"
        assert state.viewed.content == "New body"

    def test_submit_of_other_post_leaves_view(self, loaded, post_factory):
        state = reduce(loaded, PostViewed(loaded.find_post("a")))

        state = reduce(state, SubmitSucceeded(post_factory(id="b", title="Changed")))

        assert state.viewed.title == "A"

    def test_reload_refreshes_viewed_copy(self, loaded, post_factory):
        state = reduce(loaded, PostViewed(loaded.find_post("a")))

        state = reduce(state, PostsLoaded((post_factory(id="a", title="Remote edit"),)))

        assert state.viewed.title == "Remote edit"


class TestDelete:
    """Tests for the pending/confirmed delete transition."""

    def test_pending_delete_hides_post(self, loaded):
        state = reduce(loaded, DeleteRequested("b"))

        assert [p.id for p in state.visible_posts] == ["a", "c"]
        assert "b" in state.pending_deletes

    def test_confirmed_delete_removes_post(self, loaded):
        state = reduce(loaded, DeleteRequested("b"))

        state = reduce(state, DeleteConfirmed("b"))

        assert [p.id for p in state.posts] == ["a", "c"]
        assert state.pending_deletes == frozenset()

    def test_confirmed_delete_clears_viewed(self, loaded):
        state = reduce(loaded, PostViewed(loaded.find_post("b")))
        state = reduce(state, DeleteRequested("b"))

        state = reduce(state, DeleteConfirmed("b"))

        assert state.viewed is None

    def test_confirmed_delete_keeps_other_viewed(self, loaded):
        state = reduce(loaded, PostViewed(loaded.find_post("a")))

        state = reduce(state, DeleteConfirmed("b"))

        assert state.viewed.id == "a"

    def test_confirmed_delete_abandons_update_of_that_post(self, loaded):
        state = reduce(loaded, UpdateStarted(loaded.find_post("b")))

        state = reduce(state, DeleteConfirmed("b"))

        assert state.buffer == EditBuffer()

    def test_failed_delete_restores_position(self, loaded):
        state = reduce(loaded, DeleteRequested("b"))

        state = reduce(state, DeleteFailed("b", "Deleting blog post failed: denied"))

        assert [p.id for p in state.visible_posts] == ["a", "b", "c"]
        assert state.error == "Deleting blog post failed: denied"


class TestSession:

    def test_sign_in_resets_buffer(self):
        state = reduce(AppState(), BufferEdited(title="x"))

        state = reduce(state, SessionChanged(Session(True, "alice", "tok")))

        assert state.session.identity == "alice"
        assert state.buffer == EditBuffer()

    def test_success_clears_error(self, loaded):
        state = reduce(loaded, RequestFailed("oops"))

        state = reduce(state, PostsLoaded(loaded.posts))

        assert state.error is None


def test_reduce_does_not_mutate_input(loaded):
    before = loaded
    reduce(loaded, DeleteRequested("a"))
    assert before.pending_deletes == frozenset()


def test_unknown_event_rejected():
    with pytest.raises(TypeError):
        reduce(AppState(), object())
