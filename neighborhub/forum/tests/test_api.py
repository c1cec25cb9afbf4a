from http import HTTPStatus
from unittest import mock

import pytest

from neighborhub.audit.models import AuditLog
from neighborhub.forum.models import Comment
from neighborhub.forum.models import ForumPost
from neighborhub.users.models import User

pytestmark = pytest.mark.django_db

POSTS_URL = "/api/v1/forum/posts/"


@pytest.fixture
def make_post(user):
    def _make(**kwargs):
        kwargs.setdefault("author", user)
        kwargs.setdefault("neighborhood", kwargs["author"].neighborhood)
        kwargs.setdefault("title", "Lost cat")
        kwargs.setdefault("content", "Grey tabby near the park")
        kwargs.setdefault("category", ForumPost.Category.LOST_FOUND)
        return ForumPost.objects.create(**kwargs)

    return _make


class TestCreate:
    def test_verified_member_can_post(self, auth_client, user, neighborhood):
        resp = auth_client.post(
            POSTS_URL,
            {
                "title": "Block party",
                "content": "Saturday at noon",
                "category": "events",
                "tags": ["Party", "summer"],
                "images": [{"url": "https://img.example.com/a.jpg"}],
            },
            format="json",
        )

        assert resp.status_code == HTTPStatus.CREATED
        body = resp.json()
        assert body["tags"] == ["party", "summer"]
        assert body["author"]["id"] == user.pk
        assert body["neighborhood"] == neighborhood.pk
        assert body["likes_count"] == 0
        post = ForumPost.objects.get()
        assert post.tags == ",party,summer,"
        neighborhood.refresh_from_db()
        assert neighborhood.total_posts == 1

    def test_unverified_member_is_rejected(self, api_client, make_user):
        newcomer = make_user(is_verified=False)
        api_client.force_authenticate(user=newcomer)
        resp = api_client.post(
            POSTS_URL,
            {"title": "Hi", "content": "Hello", "category": "general"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.FORBIDDEN

    def test_unverified_allowed_when_neighborhood_waives(
        self,
        api_client,
        make_user,
        neighborhood,
    ):
        neighborhood.require_verification = False
        neighborhood.save()
        newcomer = make_user(is_verified=False)
        api_client.force_authenticate(user=newcomer)
        resp = api_client.post(
            POSTS_URL,
            {"title": "Hi", "content": "Hello", "category": "general"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.CREATED

    def test_new_post_is_broadcast_after_commit(
        self,
        auth_client,
        django_capture_on_commit_callbacks,
    ):
        with (
            mock.patch("neighborhub.forum.signals.publish_forum_post_created") as pub,
            django_capture_on_commit_callbacks(execute=True),
        ):
            auth_client.post(
                POSTS_URL,
                {"title": "Hi", "content": "Hello", "category": "general"},
                format="json",
            )
        pub.assert_called_once_with(ForumPost.objects.get())


class TestList:
    def test_scoped_to_own_neighborhood_and_hides_moderated(
        self,
        auth_client,
        make_post,
        make_user,
        other_neighborhood,
    ):
        visible = make_post()
        make_post(is_moderated=True)
        make_post(author=make_user(neighborhood=other_neighborhood))

        resp = auth_client.get(POSTS_URL)

        assert resp.status_code == HTTPStatus.OK
        body = resp.json()
        assert body["count"] == 1
        assert body["results"][0]["id"] == visible.pk

    def test_filters(self, auth_client, make_post):
        bikes = make_post(title="Bike swap", tags=",bikes,kids,", category="events")
        make_post(title="Plumber?", tags=",home,", category="questions")

        by_tag = auth_client.get(POSTS_URL, {"tags": "bikes"})
        by_category = auth_client.get(POSTS_URL, {"category": "events"})
        everything = auth_client.get(POSTS_URL, {"category": "all"})
        by_search = auth_client.get(POSTS_URL, {"search": "swap"})

        assert [p["id"] for p in by_tag.json()["results"]] == [bikes.pk]
        assert [p["id"] for p in by_category.json()["results"]] == [bikes.pk]
        assert everything.json()["count"] == 2  # noqa: PLR2004
        assert [p["id"] for p in by_search.json()["results"]] == [bikes.pk]

    def test_tag_filter_matches_whole_tags(self, auth_client, make_post):
        make_post(tags=",bikes,")
        resp = auth_client.get(POSTS_URL, {"tags": "bike"})
        assert resp.json()["count"] == 0

    def test_default_order_puts_sticky_first(self, auth_client, make_post):
        older_sticky = make_post(title="Rules", is_sticky=True)
        newer = make_post(title="Fresh")
        resp = auth_client.get(POSTS_URL)
        assert [p["id"] for p in resp.json()["results"]] == [older_sticky.pk, newer.pk]

    def test_sort_most_liked(self, auth_client, make_post, make_user):
        quiet = make_post(title="Quiet")
        popular = make_post(title="Popular")
        for _ in range(2):
            popular.likes.create(user=make_user())
        resp = auth_client.get(POSTS_URL, {"sort_by": "most_liked"})
        ids = [p["id"] for p in resp.json()["results"]]
        assert ids == [popular.pk, quiet.pk]
        assert resp.json()["results"][0]["likes_count"] == 2  # noqa: PLR2004

    def test_unknown_sort_is_rejected(self, auth_client):
        resp = auth_client.get(POSTS_URL, {"sort_by": "random"})
        assert resp.status_code == HTTPStatus.BAD_REQUEST

    def test_pagination_envelope(self, auth_client, make_post):
        for i in range(3):
            make_post(title=f"Post {i}")
        resp = auth_client.get(POSTS_URL, {"limit": 2})
        body = resp.json()
        assert body["count"] == 3  # noqa: PLR2004
        assert body["total_pages"] == 2  # noqa: PLR2004
        assert body["current_page"] == 1
        assert len(body["results"]) == 2  # noqa: PLR2004
        assert body["next"]


class TestDetail:
    def test_retrieve_counts_view_and_threads_comments(
        self,
        auth_client,
        make_post,
        user,
    ):
        post = make_post()
        root = Comment.objects.create(post=post, author=user, content="Seen it?")
        Comment.objects.create(post=post, author=user, content="Yes", parent=root)

        resp = auth_client.get(f"{POSTS_URL}{post.pk}/")

        assert resp.status_code == HTTPStatus.OK
        body = resp.json()
        assert body["post"]["views"] == 1
        assert body["post"]["comment_count"] == 2  # noqa: PLR2004
        [thread] = body["comments"]
        assert thread["content"] == "Seen it?"
        assert [r["content"] for r in thread["replies"]] == ["Yes"]

    def test_other_neighborhood_is_forbidden(
        self,
        auth_client,
        make_post,
        make_user,
        other_neighborhood,
    ):
        post = make_post(author=make_user(neighborhood=other_neighborhood))
        resp = auth_client.get(f"{POSTS_URL}{post.pk}/")
        assert resp.status_code == HTTPStatus.FORBIDDEN

    def test_missing_post_is_404(self, auth_client):
        resp = auth_client.get(f"{POSTS_URL}424242/")
        assert resp.status_code == HTTPStatus.NOT_FOUND


class TestWrites:
    def test_author_can_edit(self, auth_client, make_post):
        post = make_post()
        resp = auth_client.patch(
            f"{POSTS_URL}{post.pk}/",
            {"is_solved": True},
            format="json",
        )
        assert resp.status_code == HTTPStatus.OK
        post.refresh_from_db()
        assert post.is_solved is True

    def test_other_resident_cannot_edit(self, api_client, make_post, make_user):
        post = make_post()
        api_client.force_authenticate(user=make_user())
        resp = api_client.patch(f"{POSTS_URL}{post.pk}/", {"title": "x"}, format="json")
        assert resp.status_code == HTTPStatus.FORBIDDEN

    def test_moderator_delete_is_audited(self, api_client, make_post, make_user):
        post = make_post()
        moderator = make_user(role=User.Role.MODERATOR)
        api_client.force_authenticate(user=moderator)

        resp = api_client.delete(f"{POSTS_URL}{post.pk}/")

        assert resp.status_code == HTTPStatus.NO_CONTENT
        assert not ForumPost.objects.exists()
        entry = AuditLog.objects.get(action="forum_post_removed")
        assert entry.actor == moderator
        assert entry.target_id == post.pk

    def test_author_delete_is_not_audited(self, auth_client, make_post):
        post = make_post()
        auth_client.delete(f"{POSTS_URL}{post.pk}/")
        assert not AuditLog.objects.filter(action="forum_post_removed").exists()


class TestInteractions:
    def test_like_toggles(self, auth_client, make_post):
        post = make_post()
        first = auth_client.post(f"{POSTS_URL}{post.pk}/like/")
        second = auth_client.post(f"{POSTS_URL}{post.pk}/like/")

        assert first.json() == {
            "message": "Post liked",
            "likes_count": 1,
            "is_liked": True,
        }
        assert second.json()["is_liked"] is False
        assert second.json()["likes_count"] == 0

    def test_comment_and_reply(self, auth_client, make_post):
        post = make_post()
        url = f"{POSTS_URL}{post.pk}/comments/"
        root = auth_client.post(url, {"content": "Where?"}, format="json")
        assert root.status_code == HTTPStatus.CREATED

        reply = auth_client.post(
            url,
            {"content": "By the pond", "parent": root.json()["id"]},
            format="json",
        )
        assert reply.status_code == HTTPStatus.CREATED
        assert reply.json()["parent"] == root.json()["id"]

    def test_reply_parent_must_be_on_same_post(self, auth_client, make_post, user):
        post, elsewhere = make_post(), make_post(title="Other")
        foreign = Comment.objects.create(post=elsewhere, author=user, content="hi")
        resp = auth_client.post(
            f"{POSTS_URL}{post.pk}/comments/",
            {"content": "reply", "parent": foreign.pk},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert "parent" in resp.json()

    def test_empty_comment_rejected(self, auth_client, make_post):
        post = make_post()
        resp = auth_client.post(
            f"{POSTS_URL}{post.pk}/comments/",
            {"content": "   "},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST
