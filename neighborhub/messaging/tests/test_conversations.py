from datetime import timedelta

import pytest
from django.utils import timezone

from neighborhub.messaging.conversations import list_conversations
from neighborhub.messaging.conversations import list_messages
from neighborhub.messaging.conversations import mark_conversation_read
from neighborhub.messaging.conversations import send_message
from neighborhub.messaging.conversations import unread_count
from neighborhub.messaging.exceptions import AccessDenied
from neighborhub.messaging.exceptions import ConversationNotFound
from neighborhub.messaging.exceptions import RecipientNotFound
from neighborhub.messaging.models import Message
from neighborhub.messaging.models import derive_conversation_id

pytestmark = pytest.mark.django_db


def test_conversation_id_is_symmetric():
    assert derive_conversation_id(3, 7) == derive_conversation_id(7, 3) == "3_7"


def test_conversation_id_sorts_ids_as_strings():
    assert derive_conversation_id(2, 10) == "10_2"


class TestSendMessage:
    def test_persists_with_derived_conversation(self, user, make_user):
        other = make_user()
        message = send_message(user, other.pk, "Hello there")

        assert message.content == "Hello there"
        assert message.conversation_id == derive_conversation_id(user, other)
        assert message.is_read is False

    def test_unknown_recipient(self, user):
        with pytest.raises(RecipientNotFound):
            send_message(user, 999999, "hi")

    def test_inactive_recipient(self, user, make_user):
        gone = make_user(is_active=False)
        with pytest.raises(RecipientNotFound):
            send_message(user, gone.pk, "hi")

    def test_reply_continues_the_same_conversation(self, user, make_user):
        sam = make_user()
        first = send_message(user, sam.pk, "Is the ladder still free?")
        reply = send_message(sam, user.pk, "Yes, come by")

        assert reply.conversation_id == first.conversation_id
        [summary] = list_conversations(user)
        assert summary.conversation_id == first.conversation_id
        assert summary.last_message == reply
        assert summary.other_user == sam
        assert summary.unread_count == 1


class TestConversations:
    def test_lists_latest_first_with_unread_counts(self, user, make_user):
        sam, kit = make_user(), make_user()
        send_message(sam, user.pk, "one")
        send_message(sam, user.pk, "two")
        send_message(user, kit.pk, "hey kit")
        older = timezone.now() - timedelta(hours=1)
        Message.objects.filter(sender=sam).update(created_at=older)

        summaries = list_conversations(user)

        assert [s.other_user for s in summaries] == [kit, sam]
        assert summaries[0].unread_count == 0
        assert summaries[1].unread_count == 2  # noqa: PLR2004
        assert summaries[1].last_message.content == "two"

    def test_non_participant_sees_nothing(self, user, make_user):
        sam, kit = make_user(), make_user()
        send_message(sam, kit.pk, "private")
        assert list_conversations(user) == []

    def test_list_messages_returns_oldest_first_and_marks_read(self, user, make_user):
        sam = make_user()
        for text in ["a", "b", "c"]:
            send_message(sam, user.pk, text)
        conversation_id = derive_conversation_id(user, sam)

        messages = list_messages(conversation_id, user)

        assert [m.content for m in messages] == ["a", "b", "c"]
        assert all(m.is_read is False for m in messages)
        assert unread_count(user) == 0
        read = Message.objects.filter(is_read=True, read_at__isnull=False)
        assert read.count() == 3  # noqa: PLR2004

    def test_list_messages_does_not_mark_own_messages(self, user, make_user):
        sam = make_user()
        send_message(user, sam.pk, "from me")
        list_messages(derive_conversation_id(user, sam), user)
        assert unread_count(sam) == 1

    def test_list_messages_limit(self, user, make_user):
        sam = make_user()
        for i in range(5):
            send_message(sam, user.pk, f"m{i}")
        messages = list_messages(derive_conversation_id(user, sam), user, limit=2)
        assert [m.content for m in messages] == ["m3", "m4"]

    def test_unknown_conversation(self, user):
        with pytest.raises(ConversationNotFound):
            list_messages(derive_conversation_id(user.pk, 424242), user)

    def test_outsider_is_denied(self, user, make_user):
        sam, kit = make_user(), make_user()
        send_message(sam, kit.pk, "private")
        with pytest.raises(AccessDenied):
            list_messages(derive_conversation_id(sam, kit), user)
        with pytest.raises(AccessDenied):
            mark_conversation_read(derive_conversation_id(sam, kit), user)
        assert unread_count(kit) == 1

    def test_mark_read_is_idempotent(self, user, make_user):
        sam = make_user()
        send_message(sam, user.pk, "a")
        send_message(sam, user.pk, "b")
        conversation_id = derive_conversation_id(user, sam)
        assert mark_conversation_read(conversation_id, user) == 2  # noqa: PLR2004
        assert mark_conversation_read(conversation_id, user) == 0
