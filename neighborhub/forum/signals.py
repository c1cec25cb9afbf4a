from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from neighborhub.realtime.events.forum import publish_forum_post_created

from .models import ForumPost


@receiver(post_save, sender=ForumPost)
def announce_forum_post(sender, instance, created, **kwargs):
    if not created:
        return
    instance.neighborhood.increment("total_posts")
    on_commit(lambda: publish_forum_post_created(instance))
