from django.contrib import admin

from neighborhub.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "actor", "target_type", "target_id", "neighborhood"]
    list_select_related = ["actor", "neighborhood"]
    search_fields = ["action", "message", "target_type", "ip_address"]
    list_filter = ["action", "neighborhood", "created_at"]
    date_hierarchy = "created_at"
    readonly_fields = [
        field.name
        for field in models.AuditLog._meta.fields  # noqa: SLF001
    ]

    def has_add_permission(self, request):
        return False
