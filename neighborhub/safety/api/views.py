from django.db.models import Count
from django.db.models import Exists
from django.db.models import OuterRef
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import serializers
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from neighborhub.audit.utils import client_ip
from neighborhub.audit.utils import log_action
from neighborhub.safety.models import ReportAcknowledgement
from neighborhub.safety.models import SafetyReport
from neighborhub.safety.services import report_stats
from neighborhub.safety.services import toggle_acknowledgement
from neighborhub.safety.services import toggle_verification
from neighborhub.users.api.permissions import HasNeighborhood
from neighborhub.users.api.permissions import IsModeratorOrAdmin
from neighborhub.users.api.permissions import IsOwnerOrAdmin
from neighborhub.users.api.permissions import IsOwnerOrModerator
from neighborhub.users.api.permissions import IsSameNeighborhood
from neighborhub.utils.viewsets import NeighborhoodScopedMixin

from .filters import SafetyReportFilter
from .serializers import ReportCommentSerializer
from .serializers import ReportStatsSerializer
from .serializers import SafetyReportSerializer

DEFAULT_STATS_TIMEFRAME_DAYS = 30
MAX_STATS_TIMEFRAME_DAYS = 365


class TimeframeSerializer(serializers.Serializer):
    timeframe = serializers.IntegerField(
        min_value=1,
        max_value=MAX_STATS_TIMEFRAME_DAYS,
        default=DEFAULT_STATS_TIMEFRAME_DAYS,
    )


@extend_schema_view(
    list=extend_schema(tags=["Safety"]),
    create=extend_schema(tags=["Safety"]),
    retrieve=extend_schema(tags=["Safety"]),
    update=extend_schema(tags=["Safety"]),
    partial_update=extend_schema(tags=["Safety"]),
    destroy=extend_schema(tags=["Safety"]),
)
class SafetyReportViewSet(NeighborhoodScopedMixin, ModelViewSet):
    serializer_class = SafetyReportSerializer
    filterset_class = SafetyReportFilter
    owner_field = "reporter"
    update_permission_classes = [IsOwnerOrModerator]
    destroy_permission_classes = [IsOwnerOrAdmin]

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        qs = SafetyReport.objects.select_related("reporter", "verified_by").annotate(
            acknowledgements_count=Count("acknowledgements", distinct=True),
            comment_count=Count("comments", distinct=True),
            is_acknowledged=Exists(
                ReportAcknowledgement.objects.filter(
                    report=OuterRef("pk"),
                    user_id=user.pk,
                ),
            ),
        )
        if self.action != "list":
            return qs
        return qs.filter(neighborhood_id=user.neighborhood_id).order_by(
            "-created_at",
            "-pk",
        )

    def perform_create(self, serializer):
        user = self.request.user
        serializer.save(reporter=user, neighborhood_id=user.neighborhood_id)

    def perform_destroy(self, instance):
        user = self.request.user
        if instance.reporter_id != user.pk:
            log_action(
                "safety_report_removed",
                actor=user,
                message=instance.title,
                target=instance,
                neighborhood=instance.neighborhood,
                ip_address=client_ip(self.request),
            )
        instance.delete()

    def retrieve(self, request, *args, **kwargs):
        report = self.get_object()
        comments = report.comments.select_related("author")
        context = self.get_serializer_context()
        return Response(
            {
                "report": self.get_serializer(report).data,
                "comments": ReportCommentSerializer(
                    comments,
                    many=True,
                    context=context,
                ).data,
            },
        )

    @extend_schema(tags=["Safety"], request=None)
    @action(detail=True, methods=["post"])
    def acknowledge(self, request, pk=None):
        report = self.get_object()
        acknowledged, count = toggle_acknowledgement(report, request.user)
        return Response(
            {
                "message": (
                    "Report acknowledged" if acknowledged else "Acknowledgement removed"
                ),
                "is_acknowledged": acknowledged,
                "acknowledgements_count": count,
            },
        )

    @extend_schema(
        tags=["Safety"],
        request=ReportCommentSerializer,
        responses=ReportCommentSerializer,
    )
    @action(detail=True, methods=["post"])
    def comments(self, request, pk=None):
        report = self.get_object()
        context = self.get_serializer_context()
        serializer = ReportCommentSerializer(data=request.data, context=context)
        serializer.is_valid(raise_exception=True)
        comment = serializer.save(author=request.user, report=report)
        return Response(
            ReportCommentSerializer(comment, context=context).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Safety"], request=None)
    @action(
        detail=True,
        methods=["post"],
        permission_classes=[IsAuthenticated, IsModeratorOrAdmin, IsSameNeighborhood],
    )
    def verify(self, request, pk=None):
        report = self.get_object()
        verified = toggle_verification(report, request.user)
        log_action(
            "safety_report_verified" if verified else "safety_report_unverified",
            actor=request.user,
            message=report.title,
            target=report,
            neighborhood=report.neighborhood,
            ip_address=client_ip(request),
        )
        return Response(self.get_serializer(report).data)

    @extend_schema(
        tags=["Safety"],
        parameters=[OpenApiParameter("timeframe", int, description="Days")],
        responses=ReportStatsSerializer,
    )
    @action(
        detail=False,
        methods=["get"],
        permission_classes=[IsAuthenticated, HasNeighborhood],
    )
    def stats(self, request):
        params = TimeframeSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = report_stats(
            request.user.neighborhood_id,
            params.validated_data["timeframe"],
        )
        return Response(ReportStatsSerializer(data).data)
