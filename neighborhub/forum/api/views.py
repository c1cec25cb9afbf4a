from django.db.models import Count
from django.db.models import Exists
from django.db.models import OuterRef
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from neighborhub.audit.utils import client_ip
from neighborhub.audit.utils import log_action
from neighborhub.forum.models import ForumPost
from neighborhub.forum.models import PostLike
from neighborhub.forum.services import build_comment_tree
from neighborhub.forum.services import toggle_like
from neighborhub.utils.viewsets import NeighborhoodScopedMixin

from .filters import ForumPostFilter
from .serializers import CommentSerializer
from .serializers import ForumPostSerializer


@extend_schema_view(
    list=extend_schema(tags=["Forum"]),
    create=extend_schema(tags=["Forum"]),
    retrieve=extend_schema(tags=["Forum"]),
    update=extend_schema(tags=["Forum"]),
    partial_update=extend_schema(tags=["Forum"]),
    destroy=extend_schema(tags=["Forum"]),
)
class ForumPostViewSet(NeighborhoodScopedMixin, ModelViewSet):
    serializer_class = ForumPostSerializer
    filterset_class = ForumPostFilter
    owner_field = "author"

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        qs = ForumPost.objects.select_related("author").annotate(
            likes_count=Count("likes", distinct=True),
            comment_count=Count("comments", distinct=True),
            is_liked=Exists(
                PostLike.objects.filter(post=OuterRef("pk"), user_id=user.pk),
            ),
        )
        if self.action != "list":
            # Foreign neighborhoods resolve to 403 in the object check
            return qs
        return qs.filter(
            neighborhood_id=user.neighborhood_id,
            is_moderated=False,
        ).order_by("-is_sticky", "-last_activity", "-pk")

    def perform_create(self, serializer):
        user = self.request.user
        serializer.save(author=user, neighborhood_id=user.neighborhood_id)

    def perform_update(self, serializer):
        serializer.save(last_activity=timezone.now())

    def perform_destroy(self, instance):
        user = self.request.user
        if instance.author_id != user.pk:
            log_action(
                "forum_post_removed",
                actor=user,
                message=instance.title,
                target=instance,
                neighborhood=instance.neighborhood,
                ip_address=client_ip(self.request),
            )
        instance.delete()

    def retrieve(self, request, *args, **kwargs):
        post = self.get_object()
        post.increment_views()
        comments = build_comment_tree(
            post.comments.filter(is_moderated=False)
            .select_related("author")
            .order_by("created_at", "pk"),
        )
        return Response(
            {
                "post": self.get_serializer(post).data,
                "comments": CommentSerializer(
                    comments,
                    many=True,
                    context=self.get_serializer_context(),
                ).data,
            },
        )

    @extend_schema(tags=["Forum"], request=None)
    @action(detail=True, methods=["post"])
    def like(self, request, pk=None):
        post = self.get_object()
        liked, count = toggle_like(post, request.user)
        return Response(
            {
                "message": "Post liked" if liked else "Post unliked",
                "likes_count": count,
                "is_liked": liked,
            },
        )

    @extend_schema(
        tags=["Forum"],
        request=CommentSerializer,
        responses=CommentSerializer,
    )
    @action(detail=True, methods=["post"])
    def comments(self, request, pk=None):
        post = self.get_object()
        context = {**self.get_serializer_context(), "post": post}
        serializer = CommentSerializer(data=request.data, context=context)
        serializer.is_valid(raise_exception=True)
        comment = serializer.save(author=request.user, post=post)
        post.touch_activity()
        return Response(
            CommentSerializer(comment, context=context).data,
            status=status.HTTP_201_CREATED,
        )
