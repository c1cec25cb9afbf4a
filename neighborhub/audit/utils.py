from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db import models

from .models import AuditLog


def client_ip(request) -> str:
    if request is None:
        return ""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def log_action(  # noqa: PLR0913
    action: str,
    *,
    actor: object | None = None,
    message: str = "",
    target: models.Model | None = None,
    neighborhood: models.Model | None = None,
    ip_address: str = "",
) -> AuditLog:
    """Record an audit entry.

    The neighborhood defaults to the actor's when not given.
    """
    user_model = get_user_model()
    actor_user = actor if isinstance(actor, user_model) else None
    if neighborhood is None and actor_user is not None:
        neighborhood_id = actor_user.neighborhood_id
    else:
        neighborhood_id = getattr(neighborhood, "pk", None)
    target_type = ""
    target_id = None
    if target is not None:
        target_type = target._meta.label_lower  # noqa: SLF001
        target_id = target.pk
    return AuditLog.objects.create(
        action=action,
        actor=actor_user,
        message=message,
        target_type=target_type,
        target_id=target_id,
        neighborhood_id=neighborhood_id,
        ip_address=ip_address,
    )
