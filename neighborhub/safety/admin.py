from django.contrib import admin

from neighborhub.safety import models


class ReportCommentInline(admin.TabularInline):
    model = models.ReportComment
    extra = 0
    fields = ["author", "content", "is_anonymous"]
    raw_id_fields = ["author"]


@admin.register(models.SafetyReport)
class SafetyReportAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "title",
        "report_type",
        "severity",
        "status",
        "is_verified",
        "neighborhood",
    ]
    search_fields = ["title", "description", "address"]
    list_filter = ["report_type", "severity", "status", "is_verified"]
    raw_id_fields = ["reporter", "verified_by"]
    inlines = [ReportCommentInline]
