from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from neighborhub.realtime.events.messages import publish_private_message

from .models import Message


@receiver(post_save, sender=Message)
def push_private_message(sender, instance, created, **kwargs):
    if created:
        on_commit(lambda: publish_private_message(instance))
