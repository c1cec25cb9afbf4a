from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from neighborhub.forum.models import Comment
from neighborhub.forum.models import ForumPost
from neighborhub.users.api.serializers import AuthorSerializer
from neighborhub.utils.images import image_list_field
from neighborhub.utils.tags import TagListField


class ForumPostSerializer(serializers.ModelSerializer[ForumPost]):
    author = AuthorSerializer(read_only=True)
    tags = TagListField()
    images = image_list_field()
    likes_count = serializers.SerializerMethodField()
    comment_count = serializers.SerializerMethodField()
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = ForumPost
        fields = [
            "id",
            "title",
            "content",
            "category",
            "tags",
            "images",
            "author",
            "neighborhood",
            "is_sticky",
            "is_solved",
            "views",
            "likes_count",
            "comment_count",
            "is_liked",
            "last_activity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "neighborhood",
            "is_sticky",
            "views",
            "last_activity",
            "created_at",
            "updated_at",
        ]

    def get_likes_count(self, obj) -> int:
        annotated = getattr(obj, "likes_count", None)
        return annotated if annotated is not None else obj.likes.count()

    def get_comment_count(self, obj) -> int:
        annotated = getattr(obj, "comment_count", None)
        return annotated if annotated is not None else obj.comments.count()

    def get_is_liked(self, obj) -> bool:
        annotated = getattr(obj, "is_liked", None)
        if annotated is not None:
            return bool(annotated)
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return False
        return obj.likes.filter(user=request.user).exists()


class CommentSerializer(serializers.ModelSerializer[Comment]):
    author = AuthorSerializer(read_only=True)
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Comment.objects.all(),
        required=False,
        allow_null=True,
    )
    replies = serializers.SerializerMethodField()

    class Meta:
        model = Comment
        fields = ["id", "content", "author", "post", "parent", "created_at", "replies"]
        read_only_fields = ["post", "created_at"]

    def validate_content(self, value):
        value = value.strip()
        if not value:
            msg = "Comment content is required"
            raise serializers.ValidationError(msg)
        return value

    def validate_parent(self, value):
        post = self.context.get("post")
        if value is not None and post is not None and value.post_id != post.pk:
            msg = "Parent comment belongs to another post."
            raise serializers.ValidationError(msg)
        return value

    @extend_schema_field(OpenApiTypes.OBJECT)
    def get_replies(self, obj):
        children = getattr(obj, "children", [])
        return CommentSerializer(children, many=True, context=self.context).data
