import django_filters
from django.db.models import Q

from neighborhub.marketplace.models import Listing

SORT_OPTIONS = {
    "newest": ("-created_at", "-pk"),
    "oldest": ("created_at", "pk"),
    "price_low": ("price", "-created_at"),
    "price_high": ("-price", "-created_at"),
    "most_viewed": ("-views", "-created_at"),
}


class ListingFilter(django_filters.FilterSet):
    """Neighborhood marketplace search.

    ``status`` defaults to ``available``; ``all`` means every status except
    ``removed``.
    """

    status = django_filters.CharFilter(method="filter_status")
    category = django_filters.ChoiceFilter(choices=Listing.Category.choices)
    condition = django_filters.ChoiceFilter(choices=Listing.Condition.choices)
    price_min = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")
    sort_by = django_filters.ChoiceFilter(
        choices=[(key, key) for key in SORT_OPTIONS],
        method="sort",
    )

    class Meta:
        model = Listing
        fields = [
            "status",
            "category",
            "condition",
            "price_min",
            "price_max",
            "search",
            "sort_by",
        ]

    def filter_queryset(self, queryset):
        if not self.form.cleaned_data.get("status"):
            queryset = queryset.filter(status=Listing.Status.AVAILABLE)
        return super().filter_queryset(queryset)

    def filter_status(self, queryset, name, value):
        if value == "all":
            return queryset.exclude(status=Listing.Status.REMOVED)
        return queryset.filter(status=value)

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(title__icontains=value)
            | Q(description__icontains=value)
            | Q(tags__icontains=value),
        )

    def sort(self, queryset, name, value):
        return queryset.order_by(*SORT_OPTIONS[value])
