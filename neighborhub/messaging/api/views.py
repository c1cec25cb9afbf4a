from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from drf_spectacular.utils import inline_serializer
from rest_framework import serializers
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework.viewsets import ViewSet

from neighborhub.messaging.conversations import list_conversations
from neighborhub.messaging.conversations import list_messages
from neighborhub.messaging.conversations import mark_conversation_read
from neighborhub.messaging.conversations import send_message
from neighborhub.messaging.conversations import unread_count

from .serializers import ConversationSerializer
from .serializers import MessageSerializer
from .serializers import SendMessageSerializer


@extend_schema_view(
    list=extend_schema(
        tags=["Messages"],
        responses=inline_serializer(
            "ConversationList",
            {"conversations": ConversationSerializer(many=True)},
        ),
    ),
    retrieve=extend_schema(
        tags=["Messages"],
        responses=inline_serializer(
            "ConversationMessages",
            {"messages": MessageSerializer(many=True)},
        ),
    ),
)
class ConversationViewSet(ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_field = "conversation_id"
    lookup_value_regex = r"\d+_\d+"

    def list(self, request):
        summaries = list_conversations(request.user)
        data = ConversationSerializer(summaries, many=True).data
        return Response({"conversations": data})

    def retrieve(self, request, conversation_id=None):
        messages = list_messages(conversation_id, request.user)
        return Response({"messages": MessageSerializer(messages, many=True).data})

    @extend_schema(
        tags=["Messages"],
        request=None,
        responses=inline_serializer(
            "ConversationRead",
            {"updated": serializers.IntegerField()},
        ),
    )
    @action(detail=True, methods=["patch"])
    def read(self, request, conversation_id=None):
        updated = mark_conversation_read(conversation_id, request.user)
        return Response({"updated": updated})


@extend_schema(
    tags=["Messages"],
    request=SendMessageSerializer,
    responses={201: MessageSerializer},
)
class SendMessageView(APIView):
    """Send a direct message. Delivery to an open socket is best effort."""

    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "messages"

    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = send_message(
            request.user,
            serializer.validated_data["recipient_id"],
            serializer.validated_data["content"],
        )
        return Response(
            {"message": MessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )


@extend_schema(
    tags=["Messages"],
    responses=inline_serializer(
        "UnreadCount",
        {"unread_count": serializers.IntegerField()},
    ),
)
class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"unread_count": unread_count(request.user)})
