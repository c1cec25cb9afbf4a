from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

CONVERSATION_ID_SEPARATOR = "_"
MAX_MESSAGE_LENGTH = 1000


def derive_conversation_id(user_a, user_b) -> str:
    """Return the id shared by every message between two users.

    Accepts user instances or raw ids. The two id strings are sorted
    lexicographically, so the result does not depend on argument order.
    """
    ids = sorted(str(getattr(user, "pk", user)) for user in (user_a, user_b))
    return CONVERSATION_ID_SEPARATOR.join(ids)


class Message(models.Model):
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    content = models.TextField(_("Content"), max_length=MAX_MESSAGE_LENGTH)
    # Set once on first save, never recomputed
    conversation_id = models.CharField(max_length=64, db_index=True, editable=False)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "pk"]
        indexes = [
            models.Index(
                fields=["conversation_id", "-created_at"],
                name="message_conv_created_idx",
            ),
            models.Index(
                fields=["recipient", "is_read"],
                name="message_recipient_read_idx",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Message({self.sender_id} -> {self.recipient_id})"

    def save(self, *args, **kwargs):
        if not self.conversation_id:
            self.conversation_id = derive_conversation_id(
                self.sender_id,
                self.recipient_id,
            )
        super().save(*args, **kwargs)
