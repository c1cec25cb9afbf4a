from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from neighborhub.realtime.events.safety import publish_safety_alert

from .models import SafetyReport


@receiver(post_save, sender=SafetyReport)
def announce_safety_report(sender, instance, created, **kwargs):
    if created:
        on_commit(lambda: publish_safety_alert(instance))
