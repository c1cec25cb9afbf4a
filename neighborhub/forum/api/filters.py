import django_filters
from django.db.models import Q

from neighborhub.forum.models import ForumPost
from neighborhub.utils.tags import tag_filter

SORT_OPTIONS = {
    "newest": ("-created_at", "-pk"),
    "oldest": ("created_at", "pk"),
    "most_liked": ("-likes_count", "-created_at"),
    "most_viewed": ("-views", "-created_at"),
}


class ForumPostFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(method="filter_category")
    tags = django_filters.CharFilter(method="filter_tags")
    search = django_filters.CharFilter(method="filter_search")
    sort_by = django_filters.ChoiceFilter(
        choices=[(key, key) for key in SORT_OPTIONS],
        method="sort",
    )

    class Meta:
        model = ForumPost
        fields = ["category", "tags", "search", "sort_by"]

    def filter_category(self, queryset, name, value):
        if value == "all":
            return queryset
        return queryset.filter(category=value)

    def filter_tags(self, queryset, name, value):
        return queryset.filter(tag_filter(value))

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(title__icontains=value) | Q(content__icontains=value))

    def sort(self, queryset, name, value):
        return queryset.order_by(*SORT_OPTIONS[value])
