from django.urls import path

from .views import SendMessageView
from .views import UnreadCountView

urlpatterns = [
    path("send/", SendMessageView.as_view(), name="message-send"),
    path("unread-count/", UnreadCountView.as_view(), name="message-unread-count"),
]
