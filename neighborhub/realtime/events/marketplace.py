from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from neighborhub.realtime.socketio import emit_to_neighborhood

if TYPE_CHECKING:  # import for type checking only
    from neighborhub.marketplace.models import Listing


def build_listing_payload(listing: Listing, action: str) -> dict[str, Any]:
    return {
        "action": action,
        "id": listing.id,
        "title": listing.title,
        "category": listing.category,
        "price": str(listing.price),
        "priceType": listing.price_type,
        "status": listing.status,
        "sellerId": listing.seller_id,
        "sellerName": listing.seller.display_name,
        "neighborhoodId": listing.neighborhood_id,
        "createdAt": listing.created_at.isoformat(),
    }


def publish_listing_created(listing: Listing) -> None:
    emit_to_neighborhood(
        listing.neighborhood_id,
        "marketplaceUpdate",
        build_listing_payload(listing, "created"),
    )


def publish_listing_status_changed(listing: Listing) -> None:
    emit_to_neighborhood(
        listing.neighborhood_id,
        "marketplaceUpdate",
        build_listing_payload(listing, "status_changed"),
    )
