from rest_framework import serializers

from neighborhub.safety.models import ReportComment
from neighborhub.safety.models import SafetyReport
from neighborhub.users.api.serializers import AuthorSerializer
from neighborhub.utils.images import image_list_field
from neighborhub.utils.tags import TagListField


def _hide_identity(instance, data, field: str, request) -> dict:
    """Blank out ``field`` on anonymous items unless the viewer wrote them."""
    viewer_id = getattr(getattr(request, "user", None), "pk", None)
    if instance.is_anonymous and getattr(instance, f"{field}_id") != viewer_id:
        data[field] = None
    return data


class SafetyReportSerializer(serializers.ModelSerializer[SafetyReport]):
    reporter = AuthorSerializer(read_only=True)
    verified_by = AuthorSerializer(read_only=True)
    tags = TagListField()
    images = image_list_field()
    acknowledgements_count = serializers.SerializerMethodField()
    is_acknowledged = serializers.SerializerMethodField()
    comment_count = serializers.SerializerMethodField()

    class Meta:
        model = SafetyReport
        fields = [
            "id",
            "title",
            "description",
            "report_type",
            "severity",
            "status",
            "address",
            "latitude",
            "longitude",
            "images",
            "tags",
            "reporter",
            "neighborhood",
            "is_anonymous",
            "is_verified",
            "verified_by",
            "incident_at",
            "police_reported",
            "police_report_number",
            "contact_phone",
            "contact_email",
            "preferred_contact",
            "acknowledgements_count",
            "is_acknowledged",
            "comment_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "neighborhood",
            "is_verified",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "latitude": {"min_value": -90, "max_value": 90},
            "longitude": {"min_value": -180, "max_value": 180},
        }

    def validate(self, attrs):
        police_reported = attrs.get(
            "police_reported",
            getattr(self.instance, "police_reported", False),
        )
        if not police_reported and attrs.get("police_report_number"):
            raise serializers.ValidationError(
                {"police_report_number": "Only allowed when police were notified."},
            )
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return _hide_identity(instance, data, "reporter", self.context.get("request"))

    def get_acknowledgements_count(self, obj) -> int:
        annotated = getattr(obj, "acknowledgements_count", None)
        return annotated if annotated is not None else obj.acknowledgements.count()

    def get_is_acknowledged(self, obj) -> bool:
        annotated = getattr(obj, "is_acknowledged", None)
        if annotated is not None:
            return bool(annotated)
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return False
        return obj.acknowledgements.filter(user=request.user).exists()

    def get_comment_count(self, obj) -> int:
        annotated = getattr(obj, "comment_count", None)
        return annotated if annotated is not None else obj.comments.count()


class ReportCommentSerializer(serializers.ModelSerializer[ReportComment]):
    author = AuthorSerializer(read_only=True)

    class Meta:
        model = ReportComment
        fields = ["id", "content", "author", "report", "is_anonymous", "created_at"]
        read_only_fields = ["report", "created_at"]

    def validate_content(self, value):
        value = value.strip()
        if not value:
            msg = "Comment content is required"
            raise serializers.ValidationError(msg)
        return value

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return _hide_identity(instance, data, "author", self.context.get("request"))


class ReportStatsSerializer(serializers.Serializer):
    timeframe_days = serializers.IntegerField()
    total = serializers.IntegerField()
    by_type = serializers.DictField(child=serializers.IntegerField())
    by_severity = serializers.DictField(child=serializers.IntegerField())
    by_status = serializers.DictField(child=serializers.IntegerField())
