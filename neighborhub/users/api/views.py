from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from neighborhub.audit.utils import client_ip
from neighborhub.audit.utils import log_action
from neighborhub.forum.models import Comment
from neighborhub.forum.models import ForumPost
from neighborhub.marketplace.models import Listing
from neighborhub.messaging.models import Message
from neighborhub.safety.models import SafetyReport
from neighborhub.users.models import User
from neighborhub.users.models import default_preferences

from .filters import NeighborFilter
from .filters import UserFilter
from .permissions import HasNeighborhood
from .permissions import IsAdminRole
from .permissions import IsSameNeighborhood
from .serializers import ActivityStatsSerializer
from .serializers import NeighborDetailSerializer
from .serializers import PreferencesSerializer
from .serializers import PublicUserSerializer
from .serializers import RoleSerializer
from .serializers import SkillSerializer
from .serializers import UserSerializer

SELF_SERVICE_ACTIONS = {
    "me",
    "add_skill",
    "remove_skill",
    "preferences",
    "activity_stats",
}


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
)
class UserViewSet(ListModelMixin, GenericViewSet):
    """Own profile for everyone, the full member directory for admins."""

    serializer_class = UserSerializer
    queryset = User.objects.select_related("neighborhood").order_by("-date_joined")
    filter_backends = [DjangoFilterBackend]
    filterset_class = UserFilter
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in SELF_SERVICE_ACTIONS:
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdminRole()]

    def filter_queryset(self, queryset):
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)

    @extend_schema(tags=["Users"], methods=["GET", "PATCH"])
    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        if request.method == "GET":
            serializer = UserSerializer(request.user, context={"request": request})
            return Response(status=status.HTTP_200_OK, data=serializer.data)
        serializer = UserSerializer(
            request.user,
            data=request.data,
            partial=True,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @extend_schema(tags=["Users"], request=SkillSerializer)
    @action(detail=False, methods=["post"], url_path="me/skills")
    def add_skill(self, request):
        serializer = SkillSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        skill = serializer.validated_data["skill"]
        user = request.user
        if skill in user.skills:
            raise ValidationError({"skill": ["Skill already exists"]})
        user.skills = [*user.skills, skill]
        user.save(update_fields=["skills", "updated_at"])
        return Response({"skills": user.skills})

    @extend_schema(tags=["Users"], request=None)
    @action(
        detail=False,
        methods=["delete"],
        url_path=r"me/skills/(?P<skill>[^/]+)",
    )
    def remove_skill(self, request, skill=None):
        user = request.user
        wanted = (skill or "").strip().lower()
        user.skills = [s for s in user.skills if s != wanted]
        user.save(update_fields=["skills", "updated_at"])
        return Response({"skills": user.skills})

    @extend_schema(tags=["Users"], request=PreferencesSerializer)
    @action(detail=False, methods=["put"], url_path="me/preferences")
    def preferences(self, request):
        payload = request.data.get("preferences", request.data)
        serializer = PreferencesSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        user = request.user
        user.preferences = {**default_preferences(), **serializer.data}
        user.save(update_fields=["preferences", "updated_at"])
        return Response({"preferences": user.preferences})

    @extend_schema(tags=["Users"], responses=ActivityStatsSerializer)
    @action(detail=False, methods=["get"], url_path="me/activity-stats")
    def activity_stats(self, request):
        user = request.user
        data = {
            "forum_posts": ForumPost.objects.filter(author=user).count(),
            "comments": Comment.objects.filter(author=user).count(),
            "marketplace_listings": Listing.objects.filter(seller=user).count(),
            "safety_reports": SafetyReport.objects.filter(reporter=user).count(),
            "messages_sent": Message.objects.filter(sender=user).count(),
            "joined_date": user.date_joined,
            "last_active": user.last_active,
        }
        return Response(ActivityStatsSerializer(data).data)

    @extend_schema(tags=["Users"], request=RoleSerializer, responses=UserSerializer)
    @action(detail=True, methods=["patch"])
    def role(self, request, pk=None):
        user = self.get_object()
        serializer = RoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        previous = user.role
        user.role = serializer.validated_data["role"]
        user.save(update_fields=["role", "updated_at"])
        log_action(
            "role_changed",
            actor=request.user,
            message=f"{previous} -> {user.role}",
            target=user,
            neighborhood=user.neighborhood,
            ip_address=client_ip(request),
        )
        return Response(UserSerializer(user, context={"request": request}).data)


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
)
class NeighborViewSet(ListModelMixin, RetrieveModelMixin, GenericViewSet):
    """Members of the caller's neighborhood."""

    permission_classes = [IsAuthenticated, HasNeighborhood, IsSameNeighborhood]
    filter_backends = [DjangoFilterBackend]
    filterset_class = NeighborFilter
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):
        if self.action == "retrieve":
            return NeighborDetailSerializer
        return PublicUserSerializer

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        if self.action == "retrieve":
            # Other neighborhoods resolve to 403 in the object check
            return User.objects.select_related("neighborhood")
        return (
            User.objects.filter(neighborhood_id=user.neighborhood_id)
            .exclude(pk=user.pk)
            .order_by("-last_active")
        )

    def filter_queryset(self, queryset):
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)
