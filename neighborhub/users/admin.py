from django.contrib import admin
from django.contrib.auth import admin as auth_admin
from django.utils.translation import gettext_lazy as _

from neighborhub.users.models import User


@admin.register(User)
class UserAdmin(auth_admin.UserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            _("Personal info"),
            {"fields": ("first_name", "last_name", "email", "bio", "avatar")},
        ),
        (
            _("Neighborhood"),
            {
                "fields": (
                    "neighborhood",
                    "role",
                    "is_verified",
                    "verification_method",
                    "street",
                    "city",
                    "state",
                    "zip_code",
                    "latitude",
                    "longitude",
                ),
            },
        ),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (
            _("Important dates"),
            {"fields": ("last_login", "last_active", "date_joined")},
        ),
    )
    list_display = ["username", "name", "neighborhood", "role", "is_verified"]
    list_filter = ["role", "is_verified", "is_superuser"]
    search_fields = ["name", "email", "username"]
