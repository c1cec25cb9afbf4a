from __future__ import annotations

from collections.abc import Iterable

from .models import Comment
from .models import ForumPost
from .models import PostLike


def build_comment_tree(comments: Iterable[Comment]) -> list[Comment]:
    """Thread comments under their parents.

    ``comments`` must be ordered oldest first. Every comment gets a
    ``children`` list; replies whose parent is missing are dropped.
    """
    by_id: dict[int, Comment] = {}
    roots: list[Comment] = []
    for comment in comments:
        comment.children = []
        by_id[comment.pk] = comment
        if comment.parent_id is None:
            roots.append(comment)
        elif comment.parent_id in by_id:
            by_id[comment.parent_id].children.append(comment)
    return roots


def toggle_like(post: ForumPost, user) -> tuple[bool, int]:
    """Like or unlike ``post``; returns ``(is_liked, likes_count)``."""
    deleted, _ = PostLike.objects.filter(post=post, user=user).delete()
    if not deleted:
        PostLike.objects.get_or_create(post=post, user=user)
    post.touch_activity()
    return not deleted, post.likes.count()
