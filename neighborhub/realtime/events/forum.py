from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from neighborhub.realtime.socketio import emit_to_neighborhood

if TYPE_CHECKING:  # import for type checking only
    from neighborhub.forum.models import ForumPost

PREVIEW_LENGTH = 200


def build_forum_post_payload(post: ForumPost) -> dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content[:PREVIEW_LENGTH],
        "category": post.category,
        "authorId": post.author_id,
        "authorName": post.author.display_name,
        "neighborhoodId": post.neighborhood_id,
        "createdAt": post.created_at.isoformat(),
    }


def publish_forum_post_created(post: ForumPost) -> None:
    """Tell the neighborhood room about a new forum post."""
    emit_to_neighborhood(
        post.neighborhood_id,
        "newForumMessage",
        build_forum_post_payload(post),
    )
