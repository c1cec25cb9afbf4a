from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.signals import user_logged_in
from django.db.models.signals import post_save
from django.dispatch import receiver


@receiver(post_save, sender=get_user_model())
def count_new_member(sender, instance, created, **kwargs):
    """Keep ``Neighborhood.total_members`` in step with sign-ups."""
    if not created or instance.neighborhood_id is None:
        return
    instance.neighborhood.increment("total_members")


@receiver(user_logged_in)
def refresh_last_active(sender, request, user, **kwargs):
    user.touch_last_active()
