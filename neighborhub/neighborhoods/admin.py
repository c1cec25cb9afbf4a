from django.contrib import admin

from neighborhub.neighborhoods import models


class NeighborhoodZipCodeInline(admin.TabularInline):
    model = models.NeighborhoodZipCode
    extra = 1


@admin.register(models.Neighborhood)
class NeighborhoodAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "total_members", "total_posts", "total_listings"]
    search_fields = ["name", "zip_codes__code"]
    list_filter = ["require_verification", "moderate_all_posts"]
    inlines = [NeighborhoodZipCodeInline]
