from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


def default_preferences() -> dict:
    return {
        "notifications": {"email": True, "sms": False, "push": True},
        "privacy": {"show_address": False, "show_email": False, "show_phone": False},
    }


class User(AbstractUser):
    """
    Resident account. Every member belongs to exactly one neighborhood,
    resolved from the zip code at registration; staff accounts created from
    the command line may have none.
    """

    class Role(models.TextChoices):
        RESIDENT = "resident", _("Resident")
        ADMIN = "admin", _("Admin")
        MODERATOR = "moderator", _("Moderator")
        BUSINESS = "business", _("Business")

    class VerificationMethod(models.TextChoices):
        EMAIL = "email", _("Email")
        SMS = "sms", _("SMS")
        ADDRESS = "address", _("Address")

    # Derived from first and last name on save
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    first_name = CharField(_("First Name"), max_length=50, blank=True)
    last_name = CharField(_("Last Name"), max_length=50, blank=True)

    bio = models.TextField(_("Bio"), max_length=500, blank=True)
    avatar = models.URLField(_("Avatar"), max_length=500, blank=True)

    # Address
    street = CharField(max_length=255, blank=True)
    city = CharField(max_length=100, blank=True)
    state = CharField(max_length=100, blank=True)
    zip_code = CharField(max_length=10, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    neighborhood = models.ForeignKey(
        "neighborhoods.Neighborhood",
        on_delete=models.PROTECT,
        related_name="members",
        null=True,
        blank=True,
    )
    role = CharField(max_length=20, choices=Role.choices, default=Role.RESIDENT)
    is_verified = models.BooleanField(default=False)
    verification_method = CharField(
        max_length=20,
        choices=VerificationMethod.choices,
        default=VerificationMethod.EMAIL,
    )
    skills = models.JSONField(default=list, blank=True)
    preferences = models.JSONField(default=default_preferences, blank=True)
    last_active = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.name = f"{self.first_name} {self.last_name}".strip()
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    @property
    def is_moderator_or_admin(self) -> bool:
        return self.is_admin_role or self.role == self.Role.MODERATOR

    def touch_last_active(self) -> None:
        self.last_active = timezone.now()
        type(self).objects.filter(pk=self.pk).update(last_active=self.last_active)
