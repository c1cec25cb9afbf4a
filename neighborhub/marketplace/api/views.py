from django.db.models import Count
from django.db.models import Exists
from django.db.models import OuterRef
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from neighborhub.marketplace.models import Listing
from neighborhub.marketplace.models import ListingFavorite
from neighborhub.marketplace.services import bump_listing
from neighborhub.marketplace.services import toggle_favorite
from neighborhub.users.api.permissions import IsOwner
from neighborhub.users.api.permissions import IsOwnerOrAdmin
from neighborhub.users.api.permissions import IsSameNeighborhood
from neighborhub.users.models import User
from neighborhub.utils.viewsets import NeighborhoodScopedMixin

from .filters import ListingFilter
from .serializers import ListingSerializer


@extend_schema_view(
    list=extend_schema(tags=["Marketplace"]),
    create=extend_schema(tags=["Marketplace"]),
    retrieve=extend_schema(tags=["Marketplace"]),
    update=extend_schema(tags=["Marketplace"]),
    partial_update=extend_schema(tags=["Marketplace"]),
    destroy=extend_schema(tags=["Marketplace"]),
)
class ListingViewSet(NeighborhoodScopedMixin, ModelViewSet):
    serializer_class = ListingSerializer
    filterset_class = ListingFilter
    owner_field = "seller"
    update_permission_classes = [IsOwner]
    destroy_permission_classes = [IsOwnerOrAdmin]

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        qs = Listing.objects.select_related("seller").annotate(
            favorites_count=Count("favorites", distinct=True),
            is_favorited=Exists(
                ListingFavorite.objects.filter(
                    listing=OuterRef("pk"),
                    user_id=user.pk,
                ),
            ),
        )
        if self.action != "list":
            return qs
        return qs.filter(neighborhood_id=user.neighborhood_id).order_by(
            "-last_bumped",
            "-created_at",
        )

    def perform_create(self, serializer):
        user = self.request.user
        neighborhood = user.neighborhood
        if (
            user.role == User.Role.BUSINESS
            and not neighborhood.allow_business_listings
        ):
            msg = "Business listings are not allowed in this neighborhood."
            raise PermissionDenied(msg)
        serializer.save(seller=user, neighborhood=neighborhood)

    def retrieve(self, request, *args, **kwargs):
        listing = self.get_object()
        if listing.seller_id != request.user.pk:
            listing.increment_views()
        return Response(self.get_serializer(listing).data)

    @extend_schema(tags=["Marketplace"], request=None)
    @action(detail=True, methods=["post"])
    def favorite(self, request, pk=None):
        listing = self.get_object()
        favorited, count = toggle_favorite(listing, request.user)
        return Response(
            {
                "message": (
                    "Added to favorites" if favorited else "Removed from favorites"
                ),
                "is_favorited": favorited,
                "favorites_count": count,
            },
        )

    @extend_schema(tags=["Marketplace"], request=None)
    @action(
        detail=True,
        methods=["post"],
        permission_classes=[IsAuthenticated, IsSameNeighborhood, IsOwner],
    )
    def bump(self, request, pk=None):
        listing = self.get_object()
        if not bump_listing(listing):
            return Response(
                {"detail": "Listing can only be bumped once per day."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(self.get_serializer(listing).data)

    @extend_schema(tags=["Marketplace"])
    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated])
    def mine(self, request):
        qs = self.get_queryset().filter(seller=request.user)
        page = self.paginate_queryset(qs.order_by("-created_at", "-pk"))
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    @extend_schema(tags=["Marketplace"])
    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated])
    def favorites(self, request):
        qs = (
            self.get_queryset()
            .filter(
                pk__in=ListingFavorite.objects.filter(user=request.user).values(
                    "listing_id",
                ),
            )
            .exclude(status=Listing.Status.REMOVED)
        )
        page = self.paginate_queryset(qs.order_by("-last_bumped", "-pk"))
        return self.get_paginated_response(self.get_serializer(page, many=True).data)
