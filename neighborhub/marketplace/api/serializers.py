from decimal import Decimal

from rest_framework import serializers

from neighborhub.marketplace.models import Listing
from neighborhub.users.api.serializers import AuthorSerializer
from neighborhub.utils.images import image_list_field
from neighborhub.utils.tags import TagListField

USER_SETTABLE_STATUSES = [
    Listing.Status.AVAILABLE,
    Listing.Status.RESERVED,
    Listing.Status.SOLD,
    Listing.Status.REMOVED,
]


class ListingSerializer(serializers.ModelSerializer[Listing]):
    seller = AuthorSerializer(read_only=True)
    tags = TagListField()
    images = image_list_field()
    status = serializers.ChoiceField(
        choices=USER_SETTABLE_STATUSES,
        required=False,
    )
    favorites_count = serializers.SerializerMethodField()
    is_favorited = serializers.SerializerMethodField()

    class Meta:
        model = Listing
        fields = [
            "id",
            "title",
            "description",
            "category",
            "condition",
            "price",
            "price_type",
            "images",
            "tags",
            "seller",
            "neighborhood",
            "status",
            "address",
            "latitude",
            "longitude",
            "views",
            "favorites_count",
            "is_favorited",
            "expires_at",
            "last_bumped",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "neighborhood",
            "views",
            "expires_at",
            "last_bumped",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "latitude": {"min_value": -90, "max_value": 90},
            "longitude": {"min_value": -180, "max_value": 180},
            "price": {"required": False},
        }

    def validate_title(self, value):
        value = value.strip()
        if not value:
            msg = "Title is required"
            raise serializers.ValidationError(msg)
        return value

    def validate(self, attrs):
        available = Listing.Status.AVAILABLE
        if self.instance is None and attrs.get("status", available) != available:
            raise serializers.ValidationError(
                {"status": "New listings start as available."},
            )
        price_type = attrs.get(
            "price_type",
            getattr(self.instance, "price_type", Listing.PriceType.FIXED),
        )
        if price_type == Listing.PriceType.FREE:
            attrs["price"] = Decimal(0)
        elif self.instance is None and "price" not in attrs:
            raise serializers.ValidationError({"price": "This field is required."})
        return attrs

    def get_favorites_count(self, obj) -> int:
        annotated = getattr(obj, "favorites_count", None)
        return annotated if annotated is not None else obj.favorites.count()

    def get_is_favorited(self, obj) -> bool:
        annotated = getattr(obj, "is_favorited", None)
        if annotated is not None:
            return bool(annotated)
        request = self.context.get("request")
        if request is None or not request.user.is_authenticated:
            return False
        return obj.favorites.filter(user=request.user).exists()
