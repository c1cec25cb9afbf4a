from django.db import models
from django.db.models import F
from django.utils.translation import gettext_lazy as _

from neighborhub.utils.geo import point_in_polygon


class Neighborhood(models.Model):
    name = models.CharField(_("Name"), max_length=100)
    description = models.TextField(_("Description"), max_length=1000, blank=True)
    # Polygon rings of [lng, lat] pairs; the first ring is the outer boundary,
    # any further rings are holes.
    boundaries = models.JSONField(default=list, blank=True)

    # Settings
    require_verification = models.BooleanField(default=True)
    allow_business_listings = models.BooleanField(default=True)
    moderate_all_posts = models.BooleanField(default=False)
    max_posts_per_day = models.PositiveIntegerField(default=10)

    # Denormalised counters
    total_members = models.PositiveIntegerField(default=0)
    total_posts = models.PositiveIntegerField(default=0)
    total_listings = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def contains_point(self, lat: float, lng: float) -> bool:
        if not self.boundaries:
            return False
        outer, *holes = self.boundaries
        if not point_in_polygon(lng, lat, outer):
            return False
        return not any(point_in_polygon(lng, lat, hole) for hole in holes)

    def increment(self, counter: str, by: int = 1) -> None:
        """Atomically bump one of the ``total_*`` counters."""
        type(self).objects.filter(pk=self.pk).update(**{counter: F(counter) + by})


class NeighborhoodZipCode(models.Model):
    code = models.CharField(_("Zip code"), max_length=10, unique=True)
    neighborhood = models.ForeignKey(
        Neighborhood,
        on_delete=models.CASCADE,
        related_name="zip_codes",
    )

    class Meta:
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.code} -> {self.neighborhood_id}"
