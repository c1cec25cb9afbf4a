from rest_framework import serializers

from neighborhub.messaging.models import MAX_MESSAGE_LENGTH
from neighborhub.messaging.models import Message
from neighborhub.users.api.serializers import AuthorSerializer


class MessageSerializer(serializers.ModelSerializer[Message]):
    sender_name = serializers.CharField(source="sender.display_name", read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender",
            "sender_name",
            "recipient",
            "content",
            "is_read",
            "read_at",
            "created_at",
        ]
        read_only_fields = fields


class ConversationSerializer(serializers.Serializer):
    conversation_id = serializers.CharField()
    other_user = AuthorSerializer()
    last_message = MessageSerializer()
    unread_count = serializers.IntegerField()


class SendMessageSerializer(serializers.Serializer):
    recipient_id = serializers.IntegerField(min_value=1)
    content = serializers.CharField(max_length=MAX_MESSAGE_LENGTH)
