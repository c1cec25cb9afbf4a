from django.contrib import admin

from neighborhub.messaging import models


@admin.register(models.Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "conversation_id",
        "sender",
        "recipient",
        "is_read",
        "created_at",
    ]
    search_fields = ["conversation_id", "content"]
    list_filter = ["is_read", "created_at"]
    readonly_fields = ["conversation_id", "read_at", "created_at"]
