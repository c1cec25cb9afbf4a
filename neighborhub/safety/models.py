from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class SafetyReport(models.Model):
    class ReportType(models.TextChoices):
        CRIME = "crime", _("Crime")
        SUSPICIOUS_ACTIVITY = "suspicious-activity", _("Suspicious activity")
        LOST_PET = "lost-pet", _("Lost pet")
        FOUND_PET = "found-pet", _("Found pet")
        WEATHER_ALERT = "weather-alert", _("Weather alert")
        ROAD_CLOSURE = "road-closure", _("Road closure")
        UTILITY_OUTAGE = "utility-outage", _("Utility outage")
        EMERGENCY = "emergency", _("Emergency")
        OTHER = "other", _("Other")

    class Severity(models.TextChoices):
        LOW = "low", _("Low")
        MEDIUM = "medium", _("Medium")
        HIGH = "high", _("High")
        CRITICAL = "critical", _("Critical")

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        RESOLVED = "resolved", _("Resolved")
        INVESTIGATING = "investigating", _("Investigating")
        FALSE_ALARM = "false-alarm", _("False alarm")

    class PreferredContact(models.TextChoices):
        PHONE = "phone", _("Phone")
        EMAIL = "email", _("Email")
        APP = "app", _("In app")

    title = models.CharField(_("Title"), max_length=200)
    description = models.TextField(_("Description"), max_length=2000)
    report_type = models.CharField(max_length=30, choices=ReportType.choices)
    severity = models.CharField(
        max_length=20,
        choices=Severity.choices,
        default=Severity.MEDIUM,
    )
    address = models.CharField(max_length=255)
    latitude = models.FloatField()
    longitude = models.FloatField()
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="safety_reports",
    )
    neighborhood = models.ForeignKey(
        "neighborhoods.Neighborhood",
        on_delete=models.CASCADE,
        related_name="safety_reports",
    )
    images = models.JSONField(default=list, blank=True)
    # Delimited tag string, see neighborhub.utils.tags
    tags = models.CharField(max_length=512, blank=True)
    is_anonymous = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="verified_reports",
        null=True,
        blank=True,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    incident_at = models.DateTimeField(default=timezone.now)
    police_reported = models.BooleanField(default=False)
    police_report_number = models.CharField(max_length=50, blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    contact_email = models.EmailField(blank=True)
    preferred_contact = models.CharField(
        max_length=10,
        choices=PreferredContact.choices,
        default=PreferredContact.APP,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(
                fields=["neighborhood", "status", "-created_at"],
                name="report_nbhd_status_idx",
            ),
            models.Index(fields=["latitude", "longitude"], name="report_location_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class ReportAcknowledgement(models.Model):
    """A neighbor marking that they have seen a report."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="report_acknowledgements",
    )
    report = models.ForeignKey(
        SafetyReport,
        on_delete=models.CASCADE,
        related_name="acknowledgements",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "report"],
                name="unique_report_acknowledgement",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Ack({self.user_id} -> {self.report_id})"


class ReportComment(models.Model):
    content = models.TextField(_("Content"), max_length=500)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="report_comments",
    )
    report = models.ForeignKey(
        SafetyReport,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    is_anonymous = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "pk"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"ReportComment({self.author_id} on {self.report_id})"
