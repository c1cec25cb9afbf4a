from http import HTTPStatus
from unittest import mock

import pytest

from neighborhub.messaging.conversations import send_message
from neighborhub.messaging.models import Message
from neighborhub.messaging.models import derive_conversation_id

pytestmark = pytest.mark.django_db

SEND_URL = "/api/v1/messages/send/"


def test_send_returns_201_with_message(auth_client, user, make_user):
    sam = make_user()
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": sam.pk, "content": "Lawnmower back tomorrow"},
        format="json",
    )

    assert resp.status_code == HTTPStatus.CREATED
    body = resp.json()["message"]
    assert body["sender"] == user.pk
    assert body["recipient"] == sam.pk
    assert body["sender_name"] == "Alex Kim"
    assert body["conversation_id"] == derive_conversation_id(user, sam)


def test_send_validation_errors(auth_client, make_user):
    sam = make_user()
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": sam.pk, "content": "   "},
        format="json",
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "content" in resp.json()


@pytest.mark.parametrize("content", ["", "   ", None, "x" * 1001])
def test_send_rejects_bad_content(auth_client, make_user, content):
    sam = make_user()
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": sam.pk, "content": content},
        format="json",
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "content" in resp.json()
    assert not Message.objects.exists()


@pytest.mark.parametrize("recipient_id", [None, "abc", 0, -4, True, "1.5"])
def test_send_rejects_malformed_recipient(auth_client, recipient_id):
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": recipient_id, "content": "hi"},
        format="json",
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "recipient_id" in resp.json()


def test_send_trims_content_and_accepts_string_id(auth_client, make_user):
    sam = make_user()
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": str(sam.pk), "content": "  Hello there  "},
        format="json",
    )
    assert resp.status_code == HTTPStatus.CREATED
    assert Message.objects.get().content == "Hello there"
    assert Message.objects.get().recipient == sam


def test_send_to_missing_recipient_is_404(auth_client):
    resp = auth_client.post(
        SEND_URL,
        {"recipient_id": 987654, "content": "hello?"},
        format="json",
    )
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_send_requires_authentication(api_client):
    resp = api_client.post(SEND_URL, {"recipient_id": 1, "content": "x"}, format="json")
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_send_notifies_recipient_after_commit(
    auth_client,
    make_user,
    django_capture_on_commit_callbacks,
):
    sam = make_user()
    with (
        mock.patch(
            "neighborhub.messaging.signals.publish_private_message",
        ) as publish,
        django_capture_on_commit_callbacks(execute=True),
    ):
        auth_client.post(
            SEND_URL,
            {"recipient_id": sam.pk, "content": "ping"},
            format="json",
        )
    publish.assert_called_once_with(Message.objects.get())


def test_conversation_list(auth_client, user, make_user):
    sam = make_user()
    send_message(sam, user.pk, "hi")

    resp = auth_client.get("/api/v1/messages/conversations/")

    assert resp.status_code == HTTPStatus.OK
    [conversation] = resp.json()["conversations"]
    assert conversation["other_user"]["id"] == sam.pk
    assert conversation["unread_count"] == 1
    assert conversation["last_message"]["content"] == "hi"


def test_conversation_detail_marks_read(auth_client, user, make_user):
    sam = make_user()
    send_message(sam, user.pk, "hi")
    conversation_id = derive_conversation_id(user, sam)

    resp = auth_client.get(f"/api/v1/messages/conversations/{conversation_id}/")

    assert resp.status_code == HTTPStatus.OK
    assert [m["content"] for m in resp.json()["messages"]] == ["hi"]
    unread = auth_client.get("/api/v1/messages/unread-count/")
    assert unread.json() == {"unread_count": 0}


def test_conversation_detail_for_outsider_is_403(auth_client, make_user):
    sam, kit = make_user(), make_user()
    send_message(sam, kit.pk, "secret")
    resp = auth_client.get(
        f"/api/v1/messages/conversations/{derive_conversation_id(sam, kit)}/",
    )
    assert resp.status_code == HTTPStatus.FORBIDDEN
    assert resp.json()["detail"] == "Access denied"


def test_empty_conversation_is_404(auth_client, user):
    resp = auth_client.get(
        f"/api/v1/messages/conversations/{derive_conversation_id(user.pk, 5555)}/",
    )
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_mark_read_endpoint(auth_client, user, make_user):
    sam = make_user()
    send_message(sam, user.pk, "one")
    send_message(sam, user.pk, "two")
    conversation_id = derive_conversation_id(user, sam)

    resp = auth_client.patch(f"/api/v1/messages/conversations/{conversation_id}/read/")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"updated": 2}
