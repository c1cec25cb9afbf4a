from django.contrib import admin

from neighborhub.marketplace import models


@admin.register(models.Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "price", "status", "seller", "neighborhood"]
    search_fields = ["title", "description", "tags"]
    list_filter = ["status", "category", "condition", "neighborhood"]
    raw_id_fields = ["seller"]
    readonly_fields = ["views", "created_at", "updated_at"]


@admin.register(models.ListingFavorite)
class ListingFavoriteAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "listing", "created_at"]
    raw_id_fields = ["user", "listing"]
