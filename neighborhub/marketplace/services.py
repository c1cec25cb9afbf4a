from __future__ import annotations

from django.utils import timezone

from .models import Listing
from .models import ListingFavorite


def toggle_favorite(listing: Listing, user) -> tuple[bool, int]:
    """Favorite or unfavorite ``listing``; returns ``(is_favorited, count)``."""
    deleted, _ = ListingFavorite.objects.filter(listing=listing, user=user).delete()
    if not deleted:
        ListingFavorite.objects.get_or_create(listing=listing, user=user)
    return not deleted, listing.favorites.count()


def bump_listing(listing: Listing) -> bool:
    """Move ``listing`` to the top of the default sort, at most once a day."""
    now = timezone.now()
    if not listing.can_bump(now):
        return False
    listing.last_bumped = now
    listing.save(update_fields=["last_bumped", "updated_at"])
    return True
