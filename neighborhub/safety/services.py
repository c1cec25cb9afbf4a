from __future__ import annotations

from datetime import timedelta

from django.db.models import Count
from django.utils import timezone

from neighborhub.utils.geo import bounding_box
from neighborhub.utils.geo import haversine_miles

from .models import ReportAcknowledgement
from .models import SafetyReport


def toggle_acknowledgement(report: SafetyReport, user) -> tuple[bool, int]:
    """Acknowledge or un-acknowledge ``report``; returns ``(acked, count)``."""
    deleted, _ = ReportAcknowledgement.objects.filter(report=report, user=user).delete()
    if not deleted:
        ReportAcknowledgement.objects.get_or_create(report=report, user=user)
    return not deleted, report.acknowledgements.count()


def toggle_verification(report: SafetyReport, moderator) -> bool:
    report.is_verified = not report.is_verified
    report.verified_by = moderator if report.is_verified else None
    report.save(update_fields=["is_verified", "verified_by", "updated_at"])
    return report.is_verified


def _breakdown(queryset, field: str) -> dict[str, int]:
    rows = queryset.order_by().values(field).annotate(count=Count("pk"))
    return {row[field]: row["count"] for row in rows}


def report_stats(neighborhood_id: int, days: int) -> dict:
    """Totals for reports filed in the last ``days`` days."""
    since = timezone.now() - timedelta(days=days)
    qs = SafetyReport.objects.filter(
        neighborhood_id=neighborhood_id,
        created_at__gte=since,
    )
    return {
        "timeframe_days": days,
        "total": qs.count(),
        "by_type": _breakdown(qs, "report_type"),
        "by_severity": _breakdown(qs, "severity"),
        "by_status": _breakdown(qs, "status"),
    }


def within_radius(queryset, lat: float, lng: float, radius_miles: float):
    """Reports within ``radius_miles`` of ``(lat, lng)``.

    The bounding box narrows the rows in SQL; the haversine check is exact.
    """
    min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_miles)
    candidates = queryset.filter(
        latitude__range=(min_lat, max_lat),
        longitude__range=(min_lng, max_lng),
    ).values_list("pk", "latitude", "longitude")
    ids = [
        pk
        for pk, report_lat, report_lng in candidates
        if haversine_miles(lat, lng, report_lat, report_lng) <= radius_miles
    ]
    return queryset.filter(pk__in=ids)
