from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.permissions import IsAuthenticated
from rest_framework.throttling import ScopedRateThrottle

from neighborhub.users.api.permissions import HasNeighborhood
from neighborhub.users.api.permissions import IsOwnerOrModerator
from neighborhub.users.api.permissions import IsSameNeighborhood
from neighborhub.users.api.permissions import IsVerified


class NeighborhoodScopedMixin:
    """Permissions, filtering and throttling for content owned by a neighborhood.

    - create: verified member of a neighborhood, throttled by ``throttle_scope``
    - update / destroy: same neighborhood plus the view's owner checks
    - everything else: same neighborhood, or the ``permission_classes`` an
      ``@action`` declares

    Query-string filters only apply to ``list``; detail routes ignore them.
    """

    permission_classes = [IsAuthenticated, HasNeighborhood, IsSameNeighborhood]
    filter_backends = [DjangoFilterBackend]
    throttle_scope = "posts"
    owner_field = "author"
    update_permission_classes = [IsOwnerOrModerator]
    destroy_permission_classes = [IsOwnerOrModerator]
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "create":
            classes = [IsAuthenticated, HasNeighborhood, IsVerified]
        elif self.action in {"update", "partial_update"}:
            classes = [
                IsAuthenticated,
                IsSameNeighborhood,
                *self.update_permission_classes,
            ]
        elif self.action == "destroy":
            classes = [
                IsAuthenticated,
                IsSameNeighborhood,
                *self.destroy_permission_classes,
            ]
        else:
            classes = self.permission_classes
        return [permission() for permission in classes]

    def get_throttles(self):
        if self.action == "create":
            return [ScopedRateThrottle()]
        return []

    def filter_queryset(self, queryset):
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)
