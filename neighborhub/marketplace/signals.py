from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from neighborhub.realtime.events.marketplace import publish_listing_created
from neighborhub.realtime.events.marketplace import publish_listing_status_changed

from .models import Listing


@receiver(post_save, sender=Listing)
def announce_listing(sender, instance, created, **kwargs):
    if created:
        instance.neighborhood.increment("total_listings")
        on_commit(lambda: publish_listing_created(instance))
        return
    if instance.status_changed:
        on_commit(lambda: publish_listing_status_changed(instance))
    instance._loaded_status = instance.status
