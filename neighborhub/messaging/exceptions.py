from rest_framework.exceptions import NotFound
from rest_framework.exceptions import PermissionDenied


class AccessDenied(PermissionDenied):
    default_detail = "Access denied"
    default_code = "access_denied"


class ConversationNotFound(NotFound):
    default_detail = "Conversation not found."
    default_code = "conversation_not_found"


class RecipientNotFound(NotFound):
    default_detail = "Recipient not found."
    default_code = "recipient_not_found"
