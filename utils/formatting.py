"""
Text rendering for the command-line front end.
"""

from typing import List, Optional

from config import settings
from data.models import Post, Session, EditBuffer
from data.state import AppState
from utils.helpers import truncate_text


def render_header(session: Session) -> str:
    lines = ["Basic CRUD Blog"]
    if session.authenticated:
        lines.append(f"Welcome {session.identity}!")
    else:
        lines.append("Please login to create or update blog posts")
    return "\n".join(lines)


def image_url(post: Post) -> str:
    """Decorative image for a card, stable per post id."""
    return f"{settings.POST_IMAGE_URL}?random={post.id}"


def format_created(post: Post) -> str:
    if post.created_at is None:
        return "unknown"
    return post.created_at.strftime(settings.DATE_DISPLAY_FORMAT).strip()


def render_card(post: Post, actions: Optional[List[str]] = None) -> str:
    """Render one post as a list card with a truncated preview."""
    lines = [
        f"[{post.id}] {post.title}",
        f"  Created: {format_created(post)} | Owner: {post.owner or '-'}",
        f"  {truncate_text(post.content, settings.CONTENT_PREVIEW_LENGTH)}",
        f"  Image: {image_url(post)}",
    ]
    if actions:
        lines.append(f"  Actions: {', '.join(actions)}")
    return "\n".join(lines)


def render_detail(post: Optional[Post]) -> str:
    """Render the detail pane; empty fields when nothing is viewed."""
    if post is None:
        return "Title: \nContent: "
    return f"Title: {post.title}\nContent: {post.content}"


def render_buffer(buffer: EditBuffer) -> str:
    mode = f"Update Blog Post {buffer.target_id}" if buffer.is_update else "Create Blog Post"
    return f"{mode}\n  Title: {buffer.title}\n  Content: {buffer.content}"


def render_state(state: AppState, can_modify=None) -> str:
    """
    Render the whole screen.

    Args:
        state: Current application state
        can_modify: Optional callable(post) -> bool deciding which cards offer update/delete
    """
    sections = [render_header(state.session)]

    cards = []
    for post in state.visible_posts:
        actions = ["view"]
        if can_modify is not None and can_modify(post):
            actions = ["delete", "update", "view"]
        cards.append(render_card(post, actions))
    sections.append("\n\n".join(cards) if cards else "No blog posts yet.")

    sections.append(render_detail(state.viewed))
    if state.session.authenticated:
        sections.append(render_buffer(state.buffer))
    if state.error:
        sections.append(f"Error: {state.error}")
    return "\n\n".join(sections)
