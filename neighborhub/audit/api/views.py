from __future__ import annotations

from typing import TYPE_CHECKING

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from neighborhub.audit.api.serializers import AuditLogSerializer
from neighborhub.audit.models import AuditLog
from neighborhub.users.api.permissions import IsModeratorOrAdmin

if TYPE_CHECKING:
    from django.db.models import QuerySet


@extend_schema(tags=["Audit"], responses=AuditLogSerializer(many=True))
class RecentAuditView(APIView):
    """Latest audit entries; moderators only see their own neighborhood."""

    permission_classes = [IsAuthenticated, IsModeratorOrAdmin]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", "20"))
        except (TypeError, ValueError):
            limit = 20
        limit = max(1, min(limit, 100))

        qs: QuerySet[AuditLog] = AuditLog.objects.select_related("actor")
        if not request.user.is_admin_role:
            qs = qs.filter(neighborhood_id=request.user.neighborhood_id)
        rows = list(qs[:limit])
        data = AuditLogSerializer(rows, many=True).data
        return Response({"results": data, "limit": limit})
