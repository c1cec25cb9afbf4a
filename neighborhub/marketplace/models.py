from datetime import timedelta

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

LISTING_LIFETIME = timedelta(days=30)


def default_expiry():
    return timezone.now() + LISTING_LIFETIME


class Listing(models.Model):
    class Category(models.TextChoices):
        FURNITURE = "furniture", _("Furniture")
        ELECTRONICS = "electronics", _("Electronics")
        CLOTHING = "clothing", _("Clothing")
        BOOKS = "books", _("Books")
        TOYS = "toys", _("Toys")
        TOOLS = "tools", _("Tools")
        APPLIANCES = "appliances", _("Appliances")
        VEHICLES = "vehicles", _("Vehicles")
        SERVICES = "services", _("Services")
        OTHER = "other", _("Other")

    class Condition(models.TextChoices):
        NEW = "new", _("New")
        LIKE_NEW = "like-new", _("Like new")
        GOOD = "good", _("Good")
        FAIR = "fair", _("Fair")
        POOR = "poor", _("Poor")

    class PriceType(models.TextChoices):
        FIXED = "fixed", _("Fixed")
        NEGOTIABLE = "negotiable", _("Negotiable")
        FREE = "free", _("Free")
        TRADE = "trade", _("Trade")

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        RESERVED = "reserved", _("Reserved")
        SOLD = "sold", _("Sold")
        REMOVED = "removed", _("Removed")
        EXPIRED = "expired", _("Expired")

    title = models.CharField(_("Title"), max_length=100)
    description = models.TextField(_("Description"), max_length=2000)
    category = models.CharField(max_length=20, choices=Category.choices)
    condition = models.CharField(max_length=20, choices=Condition.choices)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    price_type = models.CharField(
        max_length=20,
        choices=PriceType.choices,
        default=PriceType.FIXED,
    )
    images = models.JSONField(default=list, blank=True)
    # Delimited tag string, see neighborhub.utils.tags
    tags = models.CharField(max_length=512, blank=True)
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    neighborhood = models.ForeignKey(
        "neighborhoods.Neighborhood",
        on_delete=models.CASCADE,
        related_name="listings",
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    address = models.CharField(max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    views = models.PositiveIntegerField(default=0)
    expires_at = models.DateTimeField(default=default_expiry)
    last_bumped = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_bumped", "-created_at"]
        indexes = [
            models.Index(
                fields=["neighborhood", "status", "-last_bumped"],
                name="listing_nbhd_status_idx",
            ),
            models.Index(fields=["status", "expires_at"], name="listing_expiry_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        # Lets post_save tell a status change from any other edit
        instance._loaded_status = instance.__dict__.get("status")
        return instance

    @property
    def status_changed(self) -> bool:
        loaded = getattr(self, "_loaded_status", None)
        return loaded is not None and loaded != self.status

    def increment_views(self) -> None:
        type(self).objects.filter(pk=self.pk).update(views=F("views") + 1)
        self.refresh_from_db(fields=["views"])

    def can_bump(self, now=None) -> bool:
        now = now or timezone.now()
        return timezone.localdate(self.last_bumped) != timezone.localdate(now)


class ListingFavorite(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listing_favorites",
    )
    listing = models.ForeignKey(
        Listing,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "listing"],
                name="unique_listing_favorite",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Favorite({self.user_id} -> {self.listing_id})"
