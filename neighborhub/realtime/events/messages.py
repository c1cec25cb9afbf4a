from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from neighborhub.realtime.socketio import emit_to_user

if TYPE_CHECKING:  # import for type checking only
    from neighborhub.messaging.models import Message


def build_private_message_payload(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "conversationId": message.conversation_id,
        "senderId": message.sender_id,
        "senderName": message.sender.display_name,
        "content": message.content,
        "timestamp": message.created_at.isoformat(),
    }


def publish_private_message(message: Message) -> None:
    """Deliver to the recipient's socket if they are online; otherwise drop."""
    emit_to_user(
        message.recipient_id,
        "privateMessage",
        build_private_message_payload(message),
    )
