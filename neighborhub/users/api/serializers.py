from django.contrib.auth import password_validation
from django.contrib.auth.signals import user_logged_in
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from neighborhub.neighborhoods.api.serializers import NeighborhoodSummarySerializer
from neighborhub.neighborhoods.models import Neighborhood
from neighborhub.users.models import User
from neighborhub.utils.tags import normalize_tags

MAX_SKILL_LENGTH = 50


class PublicUserSerializer(serializers.ModelSerializer[User]):
    """What neighbors may see of each other."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "first_name",
            "last_name",
            "avatar",
            "bio",
            "role",
            "is_verified",
            "skills",
            "last_active",
            "date_joined",
        ]
        read_only_fields = fields


class AuthorSerializer(serializers.ModelSerializer[User]):
    class Meta:
        model = User
        fields = ["id", "name", "avatar", "role", "is_verified"]
        read_only_fields = fields


class NeighborDetailSerializer(PublicUserSerializer):
    neighborhood = NeighborhoodSummarySerializer(read_only=True)

    class Meta(PublicUserSerializer.Meta):
        fields = [*PublicUserSerializer.Meta.fields, "neighborhood"]
        read_only_fields = fields


class NotificationPreferencesSerializer(serializers.Serializer):
    email = serializers.BooleanField(default=True)
    sms = serializers.BooleanField(default=False)
    push = serializers.BooleanField(default=True)


class PrivacyPreferencesSerializer(serializers.Serializer):
    show_address = serializers.BooleanField(default=False)
    show_email = serializers.BooleanField(default=False)
    show_phone = serializers.BooleanField(default=False)


class PreferencesSerializer(serializers.Serializer):
    notifications = NotificationPreferencesSerializer(required=False)
    privacy = PrivacyPreferencesSerializer(required=False)


class UserSerializer(serializers.ModelSerializer[User]):
    """The caller's own profile."""

    neighborhood = NeighborhoodSummarySerializer(read_only=True)
    skills = serializers.ListField(
        child=serializers.CharField(max_length=MAX_SKILL_LENGTH),
        required=False,
    )
    preferences = PreferencesSerializer(required=False)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "first_name",
            "last_name",
            "bio",
            "avatar",
            "street",
            "city",
            "state",
            "zip_code",
            "latitude",
            "longitude",
            "neighborhood",
            "role",
            "is_verified",
            "verification_method",
            "skills",
            "preferences",
            "last_active",
            "date_joined",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "username",
            "email",
            "name",
            "zip_code",
            "neighborhood",
            "role",
            "is_verified",
            "verification_method",
            "last_active",
            "date_joined",
            "created_at",
            "updated_at",
        ]

    def validate_first_name(self, value):
        if not value.strip():
            msg = "First name cannot be empty"
            raise serializers.ValidationError(msg)
        return value.strip()

    def validate_last_name(self, value):
        if not value.strip():
            msg = "Last name cannot be empty"
            raise serializers.ValidationError(msg)
        return value.strip()

    def validate_skills(self, value):
        return normalize_tags(value)

    def update(self, instance, validated_data):
        preferences = validated_data.pop("preferences", None)
        if preferences is not None:
            merged = dict(instance.preferences or {})
            for section, values in preferences.items():
                merged[section] = {**merged.get(section, {}), **values}
            instance.preferences = merged
        return super().update(instance, validated_data)


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=50)
    last_name = serializers.CharField(max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    zip_code = serializers.CharField(max_length=10)
    street = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    latitude = serializers.FloatField(required=False, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, min_value=-180, max_value=180)

    def validate_first_name(self, value):
        value = value.strip()
        if not value:
            msg = "First name is required"
            raise serializers.ValidationError(msg)
        return value

    def validate_last_name(self, value):
        value = value.strip()
        if not value:
            msg = "Last name is required"
            raise serializers.ValidationError(msg)
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            msg = "User already exists with this email"
            raise serializers.ValidationError(msg)
        return value

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def validate_zip_code(self, value):
        value = value.strip()
        neighborhood = Neighborhood.objects.filter(zip_codes__code=value).first()
        if neighborhood is None:
            msg = "No neighborhood found for this zip code"
            raise serializers.ValidationError(msg)
        self._neighborhood = neighborhood
        return value

    def create(self, validated_data):
        password = validated_data.pop("password")
        email = validated_data["email"]
        return User.objects.create_user(
            username=email,
            password=password,
            neighborhood=self._neighborhood,
            **validated_data,
        )


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=6)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            msg = "Current password is incorrect"
            raise serializers.ValidationError(msg)
        return value

    def validate_new_password(self, value):
        password_validation.validate_password(
            value,
            user=self.context["request"].user,
        )
        return value


class SkillSerializer(serializers.Serializer):
    skill = serializers.CharField(max_length=MAX_SKILL_LENGTH)

    def validate_skill(self, value):
        value = value.strip().lower()
        if not value:
            msg = "Skill is required"
            raise serializers.ValidationError(msg)
        return value


class RoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices)


class ActivityStatsSerializer(serializers.Serializer):
    forum_posts = serializers.IntegerField()
    comments = serializers.IntegerField()
    marketplace_listings = serializers.IntegerField()
    safety_reports = serializers.IntegerField()
    messages_sent = serializers.IntegerField()
    joined_date = serializers.DateTimeField()
    last_active = serializers.DateTimeField()


class LoginSerializer(TokenObtainPairSerializer):
    """Token pair for a username or email plus password.

    Clients may send ``email`` instead of ``username``; the authentication
    backend accepts either.
    """

    def __init__(self, *args, **kwargs):
        data = kwargs.get("data")
        username_missing = data is not None and not data.get(self.username_field)
        if username_missing and data.get("email"):
            data = dict(data.items())
            data[self.username_field] = data["email"]
            kwargs["data"] = data
        super().__init__(*args, **kwargs)

    def validate(self, attrs):
        data = super().validate(attrs)
        request = self.context.get("request")
        user_logged_in.send(sender=type(self.user), request=request, user=self.user)
        data["user"] = UserSerializer(self.user, context=self.context).data
        return data
