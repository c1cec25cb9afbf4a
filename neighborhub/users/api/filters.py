import django_filters
from django.db.models import Q

from neighborhub.users.models import User

ROLE_CHOICES = [*User.Role.choices, ("all", "all")]


class NeighborFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    role = django_filters.ChoiceFilter(choices=ROLE_CHOICES, method="filter_role")

    class Meta:
        model = User
        fields = ["search", "role"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(skills__icontains=value),
        )

    def filter_role(self, queryset, name, value):
        if value == "all":
            return queryset
        return queryset.filter(role=value)


class UserFilter(NeighborFilter):
    """Admin member directory. ``role=all`` is the same as no role filter."""

    neighborhood = django_filters.NumberFilter(field_name="neighborhood_id")
    verified = django_filters.BooleanFilter(field_name="is_verified")

    class Meta:
        model = User
        fields = ["search", "role", "neighborhood", "verified"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(email__icontains=value),
        )
