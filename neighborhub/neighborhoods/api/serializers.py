from rest_framework import serializers

from neighborhub.neighborhoods.models import Neighborhood


class NeighborhoodSummarySerializer(serializers.ModelSerializer[Neighborhood]):
    class Meta:
        model = Neighborhood
        fields = ["id", "name", "description"]


class NeighborhoodSerializer(serializers.ModelSerializer[Neighborhood]):
    zip_codes = serializers.SlugRelatedField(
        many=True,
        read_only=True,
        slug_field="code",
    )

    class Meta:
        model = Neighborhood
        fields = [
            "id",
            "name",
            "description",
            "zip_codes",
            "boundaries",
            "require_verification",
            "allow_business_listings",
            "moderate_all_posts",
            "max_posts_per_day",
            "total_members",
            "total_posts",
            "total_listings",
            "created_at",
        ]
        read_only_fields = fields


class ZipCodeLookupSerializer(serializers.Serializer):
    zip_code = serializers.RegexField(r"^\d{5}(-\d{4})?$")


class LocateSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class NeighborhoodStatsSerializer(serializers.Serializer):
    total_members = serializers.IntegerField()
    online_members = serializers.IntegerField()
    forum_posts = serializers.IntegerField()
    active_listings = serializers.IntegerField()
    active_safety_reports = serializers.IntegerField()
