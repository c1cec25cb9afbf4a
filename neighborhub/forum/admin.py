from django.contrib import admin

from neighborhub.forum import models


class CommentInline(admin.TabularInline):
    model = models.Comment
    extra = 0
    fields = ["author", "content", "parent", "is_moderated"]
    raw_id_fields = ["author", "parent"]


@admin.register(models.ForumPost)
class ForumPostAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "category", "author", "neighborhood", "is_sticky"]
    search_fields = ["title", "content", "tags"]
    list_filter = ["category", "is_sticky", "is_moderated", "neighborhood"]
    raw_id_fields = ["author"]
    inlines = [CommentInline]
