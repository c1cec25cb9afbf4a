"""Conversation model for direct messages.

A conversation is not stored anywhere: it is the set of messages sharing a
``conversation_id``. Everything here works on the ``Message`` table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db.models import Count
from django.db.models import Max
from django.db.models import OuterRef
from django.db.models import Q
from django.db.models import Subquery
from django.utils import timezone

from .exceptions import AccessDenied
from .exceptions import ConversationNotFound
from .exceptions import RecipientNotFound
from .models import Message
from .models import derive_conversation_id

if TYPE_CHECKING:
    from neighborhub.users.models import User

logger = logging.getLogger(__name__)

MESSAGE_HISTORY_LIMIT = 100

__all__ = [
    "MESSAGE_HISTORY_LIMIT",
    "ConversationSummary",
    "derive_conversation_id",
    "list_conversations",
    "list_messages",
    "mark_conversation_read",
    "send_message",
    "unread_count",
]


@dataclass
class ConversationSummary:
    conversation_id: str
    other_user: User
    last_message: Message
    unread_count: int = 0


def _participant_filter(viewer: User) -> Q:
    return Q(sender=viewer) | Q(recipient=viewer)


def list_conversations(viewer: User) -> list[ConversationSummary]:
    """Conversations the viewer takes part in, most recent first."""
    latest = Message.objects.filter(
        conversation_id=OuterRef("conversation_id"),
    ).order_by("-created_at", "-pk")
    rows = list(
        Message.objects.filter(_participant_filter(viewer))
        .values("conversation_id")
        .annotate(
            last_message_id=Subquery(latest.values("pk")[:1]),
            last_at=Max("created_at"),
            unread=Count("pk", filter=Q(recipient=viewer, is_read=False)),
        )
        .order_by("-last_at", "conversation_id"),
    )
    last_messages = Message.objects.select_related("sender", "recipient").in_bulk(
        [row["last_message_id"] for row in rows],
    )

    summaries = []
    for row in rows:
        last = last_messages[row["last_message_id"]]
        other = last.recipient if last.sender_id == viewer.pk else last.sender
        summaries.append(
            ConversationSummary(
                conversation_id=row["conversation_id"],
                other_user=other,
                last_message=last,
                unread_count=row["unread"],
            ),
        )
    return summaries


def _authorize(conversation_id: str, viewer: User) -> None:
    sample = (
        Message.objects.filter(conversation_id=conversation_id)
        .only("sender_id", "recipient_id")
        .first()
    )
    if sample is None:
        raise ConversationNotFound
    if viewer.pk not in (sample.sender_id, sample.recipient_id):
        logger.warning(
            "User %s denied access to conversation %s",
            viewer.pk,
            conversation_id,
        )
        raise AccessDenied


def _mark_read(conversation_id: str, viewer: User) -> int:
    # Conditional bulk update: concurrent or repeated calls only flip rows
    # that are still unread.
    return Message.objects.filter(
        conversation_id=conversation_id,
        recipient=viewer,
        is_read=False,
    ).update(is_read=True, read_at=timezone.now())


def list_messages(
    conversation_id: str,
    viewer: User,
    limit: int = MESSAGE_HISTORY_LIMIT,
) -> list[Message]:
    """Return the latest ``limit`` messages, oldest first, and mark them read.

    The returned instances are loaded before the read update, so they show
    the state the viewer had not seen yet.
    """
    _authorize(conversation_id, viewer)
    recent = list(
        Message.objects.filter(conversation_id=conversation_id)
        .select_related("sender")
        .order_by("-created_at", "-pk")[:limit],
    )
    recent.reverse()
    _mark_read(conversation_id, viewer)
    return recent


def mark_conversation_read(conversation_id: str, viewer: User) -> int:
    _authorize(conversation_id, viewer)
    return _mark_read(conversation_id, viewer)


def send_message(sender: User, recipient_id: int, content: str) -> Message:
    """Persist a direct message.

    Callers validate the content and the id shape; see
    ``neighborhub.messaging.api.serializers.SendMessageSerializer``. The
    recipient is notified after the transaction commits (see
    ``neighborhub.messaging.signals``).
    """
    recipient = get_user_model().objects.filter(pk=recipient_id, is_active=True).first()
    if recipient is None:
        raise RecipientNotFound

    return Message.objects.create(sender=sender, recipient=recipient, content=content)


def unread_count(viewer: User) -> int:
    return Message.objects.filter(recipient=viewer, is_read=False).count()
