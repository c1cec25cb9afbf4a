import django_filters
from django.db.models import Case
from django.db.models import IntegerField
from django.db.models import Value
from django.db.models import When

from neighborhub.safety.models import SafetyReport
from neighborhub.safety.services import within_radius

DEFAULT_RADIUS_MILES = 5
MAX_RADIUS_MILES = 100

SEVERITY_RANK = Case(
    When(severity=SafetyReport.Severity.CRITICAL, then=Value(4)),
    When(severity=SafetyReport.Severity.HIGH, then=Value(3)),
    When(severity=SafetyReport.Severity.MEDIUM, then=Value(2)),
    When(severity=SafetyReport.Severity.LOW, then=Value(1)),
    default=Value(0),
    output_field=IntegerField(),
)

SORT_OPTIONS = {
    "newest": ("-created_at", "-pk"),
    "oldest": ("created_at", "pk"),
    "severity": ("-severity_rank", "-created_at"),
    "most_acknowledged": ("-acknowledgements_count", "-created_at"),
}


class SafetyReportFilter(django_filters.FilterSet):
    """Neighborhood safety feed.

    ``status`` defaults to ``active`` (``all`` disables it). ``lat`` and
    ``lng`` together restrict results to ``radius`` miles around the point.
    """

    type = django_filters.ChoiceFilter(
        field_name="report_type",
        choices=SafetyReport.ReportType.choices,
    )
    severity = django_filters.ChoiceFilter(choices=SafetyReport.Severity.choices)
    status = django_filters.CharFilter(method="filter_status")
    lat = django_filters.NumberFilter(method="filter_nearby")
    lng = django_filters.NumberFilter(method="filter_nearby")
    radius = django_filters.NumberFilter(method="filter_nearby")
    sort_by = django_filters.ChoiceFilter(
        choices=[(key, key) for key in SORT_OPTIONS],
        method="sort",
    )

    class Meta:
        model = SafetyReport
        fields = ["type", "severity", "status", "lat", "lng", "radius", "sort_by"]

    def filter_queryset(self, queryset):
        data = self.form.cleaned_data
        if not data.get("status"):
            queryset = queryset.filter(status=SafetyReport.Status.ACTIVE)
        queryset = super().filter_queryset(queryset)
        lat, lng = data.get("lat"), data.get("lng")
        if lat is not None and lng is not None:
            radius = data.get("radius") or DEFAULT_RADIUS_MILES
            queryset = within_radius(
                queryset,
                float(lat),
                float(lng),
                min(float(radius), MAX_RADIUS_MILES),
            )
        return queryset

    def filter_status(self, queryset, name, value):
        if value == "all":
            return queryset
        return queryset.filter(status=value)

    def filter_nearby(self, queryset, name, value):
        # Needs lat, lng and radius together; applied in filter_queryset
        return queryset

    def sort(self, queryset, name, value):
        if value == "severity":
            queryset = queryset.annotate(severity_rank=SEVERITY_RANK)
        return queryset.order_by(*SORT_OPTIONS[value])
