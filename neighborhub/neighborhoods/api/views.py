from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet

from neighborhub.forum.models import ForumPost
from neighborhub.marketplace.models import Listing
from neighborhub.neighborhoods.models import Neighborhood
from neighborhub.realtime.presence import get_presence_store
from neighborhub.safety.models import SafetyReport
from neighborhub.users.models import User

from .serializers import LocateSerializer
from .serializers import NeighborhoodSerializer
from .serializers import NeighborhoodStatsSerializer
from .serializers import NeighborhoodSummarySerializer
from .serializers import ZipCodeLookupSerializer


@extend_schema_view(
    list=extend_schema(tags=["Neighborhoods"]),
    retrieve=extend_schema(tags=["Neighborhoods"]),
)
class NeighborhoodViewSet(ReadOnlyModelViewSet):
    serializer_class = NeighborhoodSerializer
    queryset = Neighborhood.objects.prefetch_related("zip_codes")
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in {"lookup", "locate"}:
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        tags=["Neighborhoods"],
        parameters=[OpenApiParameter("zip_code", str, required=True)],
        responses=NeighborhoodSummarySerializer,
    )
    @action(detail=False, methods=["get"], authentication_classes=[])
    def lookup(self, request):
        """Resolve the neighborhood serving a zip code (used by sign-up)."""
        params = ZipCodeLookupSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        neighborhood = get_object_or_404(
            Neighborhood,
            zip_codes__code=params.validated_data["zip_code"],
        )
        return Response(NeighborhoodSummarySerializer(neighborhood).data)

    @extend_schema(
        tags=["Neighborhoods"],
        parameters=[
            OpenApiParameter("lat", float, required=True),
            OpenApiParameter("lng", float, required=True),
        ],
        responses=NeighborhoodSummarySerializer,
    )
    @action(detail=False, methods=["get"], authentication_classes=[])
    def locate(self, request):
        """Find the neighborhood whose boundary contains the point."""
        params = LocateSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        lat = params.validated_data["lat"]
        lng = params.validated_data["lng"]
        for neighborhood in Neighborhood.objects.order_by("pk"):
            if neighborhood.contains_point(lat, lng):
                return Response(NeighborhoodSummarySerializer(neighborhood).data)
        msg = "No neighborhood covers this location."
        raise NotFound(msg)

    @extend_schema(tags=["Neighborhoods"], responses=NeighborhoodStatsSerializer)
    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        neighborhood = self.get_object()
        online_ids = get_presence_store().snapshot().keys()
        data = {
            "total_members": User.objects.filter(neighborhood=neighborhood).count(),
            "online_members": User.objects.filter(
                neighborhood=neighborhood,
                pk__in=list(online_ids),
            ).count(),
            "forum_posts": ForumPost.objects.filter(
                neighborhood=neighborhood,
                is_moderated=False,
            ).count(),
            "active_listings": Listing.objects.filter(
                neighborhood=neighborhood,
                status=Listing.Status.AVAILABLE,
            ).count(),
            "active_safety_reports": SafetyReport.objects.filter(
                neighborhood=neighborhood,
                status=SafetyReport.Status.ACTIVE,
            ).count(),
        }
        return Response(NeighborhoodStatsSerializer(data).data)
