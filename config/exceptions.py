"""Project-wide DRF exception handler."""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"


def api_exception_handler(exc, context):
    """Let DRF shape the errors it knows about; turn the rest into a 500.

    Unknown exceptions are logged with the view, method, path and user id.
    Request bodies and headers are never logged because they can carry
    passwords and tokens.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    request = context.get("request")
    view = context.get("view")
    user = getattr(request, "user", None)
    logger.exception(
        "Unhandled API error in %s (%s %s, user=%s)",
        type(view).__name__ if view is not None else "unknown view",
        getattr(request, "method", "-"),
        getattr(request, "path", "-"),
        getattr(user, "pk", None),
        exc_info=exc,
    )
    set_rollback()
    body = {"detail": GENERIC_ERROR}
    if settings.DEBUG:
        body["error"] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
