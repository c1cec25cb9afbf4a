from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from neighborhub.realtime.socketio import emit_to_neighborhood

if TYPE_CHECKING:  # import for type checking only
    from neighborhub.safety.models import SafetyReport


def build_safety_alert_payload(report: SafetyReport) -> dict[str, Any]:
    # Anonymous reports never carry the reporter's identity
    if report.is_anonymous:
        reporter_id, reporter_name = None, "Anonymous"
    else:
        reporter_id, reporter_name = report.reporter_id, report.reporter.display_name
    return {
        "id": report.id,
        "title": report.title,
        "type": report.report_type,
        "severity": report.severity,
        "status": report.status,
        "location": {
            "address": report.address,
            "lat": report.latitude,
            "lng": report.longitude,
        },
        "reporterId": reporter_id,
        "reporterName": reporter_name,
        "neighborhoodId": report.neighborhood_id,
        "createdAt": report.created_at.isoformat(),
    }


def publish_safety_alert(report: SafetyReport) -> None:
    """Push a new safety report to everyone in its neighborhood."""
    emit_to_neighborhood(
        report.neighborhood_id,
        "safetyAlert",
        build_safety_alert_payload(report),
    )
