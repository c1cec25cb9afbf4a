"""Global Socket.IO server: presence and neighborhood rooms.

Frontend convention:
- Socket.IO path: /ws/socket.io/
- Auth: `query.token` or `auth.token` (JWT access token)
- After connecting the client emits `authenticate` (its user id) and
  `joinNeighborhood` (its neighborhood id).

Every emit here is best effort: no acks, no retries, no replay after a
reconnect. The HTTP API stays the source of truth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

from neighborhub.messaging.models import MAX_MESSAGE_LENGTH

from .presence import get_presence_store

logger = logging.getLogger(__name__)

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=getattr(settings, "SOCKETIO_CORS_ALLOWED_ORIGINS", "*"),
    logger=False,
    engineio_logger=False,
)


@dataclass(frozen=True)
class UserRealtimeContext:
    user_id: int
    neighborhood_id: int | None
    display_name: str


def room_for_neighborhood(neighborhood_id: int) -> str:
    return f"neighborhood_{int(neighborhood_id)}"


def _coerce_id(value: Any) -> int | None:
    """Positive integer id from ``5`` or ``"5"``; ``None`` for anything else."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        result = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return result if result > 0 else None


@database_sync_to_async
def _get_user_context_from_access_token(token: str) -> UserRealtimeContext:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return UserRealtimeContext(
        user_id=int(user.pk),
        neighborhood_id=user.neighborhood_id,
        display_name=user.display_name,
    )


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    # Allow `auth: { token }` as fallback.
    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


async def _session(sid: str) -> dict[str, Any]:
    session = await sio.get_session(sid)
    return session if isinstance(session, dict) else {}


# Presence -------------------------------------------------------------------


async def mark_online(sid: str, user_id: int) -> None:
    """Register ``sid`` as the user's connection and tell everyone else."""
    replaced = get_presence_store().register(user_id, sid)
    if replaced is not None:
        logger.debug("User %s moved from socket %s to %s", user_id, replaced, sid)
    await sio.emit("userOnline", user_id, skip_sid=sid)


async def mark_offline(sid: str) -> int | None:
    """Drop ``sid``; broadcast ``userOffline`` if it was the user's live socket."""
    user_id = get_presence_store().unregister(sid)
    if user_id is not None:
        await sio.emit("userOffline", user_id)
    return user_id


# Room router ----------------------------------------------------------------


async def join_neighborhood(sid: str, neighborhood_id: int) -> None:
    # Rooms are not persisted; clients rejoin after every reconnect.
    await sio.enter_room(sid, room_for_neighborhood(neighborhood_id))


async def broadcast_to_neighborhood(
    neighborhood_id: int,
    event: str,
    payload: Any,
) -> None:
    """Emit to every socket in the neighborhood room, originator included."""
    await sio.emit(event, payload, room=room_for_neighborhood(neighborhood_id))


async def send_to_user(user_id: int, event: str, payload: Any) -> bool:
    """Emit to the user's live socket; returns False when they are offline."""
    handle = get_presence_store().lookup(int(user_id))
    if handle is None:
        logger.debug("Dropping %s for offline user %s", event, user_id)
        return False
    try:
        await sio.emit(event, payload, to=handle)
    except Exception:  # noqa: BLE001 - delivery failures are never surfaced
        logger.warning("Failed to deliver %s to user %s", event, user_id)
        return False
    return True


def emit_to_neighborhood(neighborhood_id: int, event: str, payload: Any) -> None:
    """Emit to a neighborhood room from sync Django code."""
    try:
        async_to_sync(broadcast_to_neighborhood)(neighborhood_id, event, payload)
    except Exception:  # noqa: BLE001 - realtime must never break a request
        logger.exception(
            "Failed to emit %s to neighborhood %s",
            event,
            neighborhood_id,
        )


def emit_to_user(user_id: int, event: str, payload: Any) -> bool:
    """Emit to a single user from sync Django code."""
    try:
        return async_to_sync(send_to_user)(user_id, event, payload)
    except Exception:  # noqa: BLE001 - realtime must never break a request
        logger.exception("Failed to emit %s to user %s", event, user_id)
        return False


# Handlers -------------------------------------------------------------------


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise socketio.exceptions.ConnectionRefusedError(msg)

    try:
        ctx = await _get_user_context_from_access_token(token)
    except (TokenError, AuthenticationFailed) as exc:
        # InvalidToken wraps the per-token-type messages, e.g. "Token is expired"
        if "expired" in str(exc).lower():
            msg = "jwt_expired"
            raise socketio.exceptions.ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise socketio.exceptions.ConnectionRefusedError(msg) from exc
    except Exception as exc:
        logger.exception("Socket.IO connect error")
        msg = "server_error"
        raise socketio.exceptions.ConnectionRefusedError(msg) from exc

    await sio.save_session(
        sid,
        {
            "user_id": ctx.user_id,
            "neighborhood_id": ctx.neighborhood_id,
            "display_name": ctx.display_name,
        },
    )


@sio.event
async def disconnect(sid: str, reason: Any = None):
    await mark_offline(sid)


@sio.event
async def authenticate(sid: str, data: Any = None):
    session = await _session(sid)
    user_id = session.get("user_id")
    if user_id is None:
        logger.warning("authenticate on socket %s without a session", sid)
        return
    claimed = data.get("userId") if isinstance(data, dict) else data
    if claimed is not None and _coerce_id(claimed) != user_id:
        logger.warning(
            "Socket %s claimed user %r but token belongs to %s; ignoring",
            sid,
            claimed,
            user_id,
        )
        return
    await mark_online(sid, user_id)


@sio.on("joinNeighborhood")
async def on_join_neighborhood(sid: str, data: Any = None):
    session = await _session(sid)
    raw = data.get("neighborhoodId") if isinstance(data, dict) else data
    neighborhood_id = _coerce_id(raw)
    if neighborhood_id is None:
        logger.warning("joinNeighborhood with malformed payload from %s", sid)
        return
    if neighborhood_id != session.get("neighborhood_id"):
        logger.warning(
            "User %s tried to join neighborhood %s",
            session.get("user_id"),
            neighborhood_id,
        )
        return
    await join_neighborhood(sid, neighborhood_id)


async def _rebroadcast(sid: str, data: Any, event: str) -> None:
    if not isinstance(data, dict):
        logger.warning("%s with malformed payload from %s", event, sid)
        return
    session = await _session(sid)
    neighborhood_id = _coerce_id(data.get("neighborhoodId"))
    if neighborhood_id is None or neighborhood_id != session.get("neighborhood_id"):
        logger.warning("%s from %s for a foreign neighborhood", event, sid)
        return
    await broadcast_to_neighborhood(neighborhood_id, event, data)


@sio.on("forumMessage")
async def on_forum_message(sid: str, data: Any = None):
    await _rebroadcast(sid, data, "newForumMessage")


@sio.on("marketplaceUpdate")
async def on_marketplace_update(sid: str, data: Any = None):
    await _rebroadcast(sid, data, "marketplaceUpdate")


@sio.on("safetyAlert")
async def on_safety_alert(sid: str, data: Any = None):
    await _rebroadcast(sid, data, "safetyAlert")


@sio.on("privateMessage")
async def on_private_message(sid: str, data: Any = None):
    """Relay a message to the recipient's socket. Not persisted."""
    if not isinstance(data, dict):
        logger.warning("privateMessage with malformed payload from %s", sid)
        return
    recipient_id = _coerce_id(data.get("recipientId"))
    content = data.get("content")
    text = content.strip() if isinstance(content, str) else ""
    if recipient_id is None or not text or len(text) > MAX_MESSAGE_LENGTH:
        logger.warning("privateMessage with malformed payload from %s", sid)
        return
    session = await _session(sid)
    await send_to_user(
        recipient_id,
        "privateMessage",
        {
            "senderId": session.get("user_id"),
            "senderName": session.get("display_name", ""),
            "content": text,
            "timestamp": timezone.now().isoformat(),
        },
    )


@sio.on("getOnlineUsers")
async def on_get_online_users(sid: str, data: Any = None):
    await sio.emit("onlineUsers", get_presence_store().online_user_ids(), to=sid)
