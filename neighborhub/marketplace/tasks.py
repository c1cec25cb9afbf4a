import logging

from celery import shared_task
from django.utils import timezone

from neighborhub.marketplace.models import Listing

logger = logging.getLogger(__name__)


@shared_task(name="marketplace.expire_listings")
def expire_listings() -> int:
    """Mark open listings past their ``expires_at`` as expired.

    Returns:
        Number of listings updated.
    """
    now = timezone.now()
    updated = Listing.objects.filter(
        status__in=[Listing.Status.AVAILABLE, Listing.Status.RESERVED],
        expires_at__lte=now,
    ).update(status=Listing.Status.EXPIRED, updated_at=now)
    if updated:
        logger.info("Expired %s marketplace listings", updated)
    return updated
