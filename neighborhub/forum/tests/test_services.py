import pytest

from neighborhub.forum.models import Comment
from neighborhub.forum.models import ForumPost
from neighborhub.forum.services import build_comment_tree
from neighborhub.forum.services import toggle_like

pytestmark = pytest.mark.django_db


@pytest.fixture
def post(user, neighborhood):
    return ForumPost.objects.create(
        title="Snow plow schedule",
        content="Does anyone know?",
        category=ForumPost.Category.QUESTIONS,
        author=user,
        neighborhood=neighborhood,
    )


def test_comment_tree_nests_replies(post, user):
    a = Comment.objects.create(post=post, author=user, content="a")
    b = Comment.objects.create(post=post, author=user, content="b")
    a1 = Comment.objects.create(post=post, author=user, content="a1", parent=a)
    a1x = Comment.objects.create(post=post, author=user, content="a1x", parent=a1)

    roots = build_comment_tree(post.comments.order_by("created_at", "pk"))

    assert roots == [a, b]
    assert roots[0].children == [a1]
    assert roots[0].children[0].children == [a1x]
    assert roots[1].children == []


def test_comment_tree_drops_orphans(post, user):
    parent = Comment.objects.create(post=post, author=user, content="p")
    child = Comment.objects.create(post=post, author=user, content="c", parent=parent)
    assert build_comment_tree([child]) == []


def test_toggle_like_touches_activity(post, user):
    before = post.last_activity
    assert toggle_like(post, user) == (True, 1)
    assert toggle_like(post, user) == (False, 0)
    post.refresh_from_db()
    assert post.last_activity >= before
