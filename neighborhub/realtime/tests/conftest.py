from collections import defaultdict

import pytest

from neighborhub.realtime import socketio as realtime


class RecordingServer:
    """Stands in for the Socket.IO server and records what would be sent."""

    def __init__(self):
        self.emitted = []
        self.sessions = {}
        self.rooms = defaultdict(set)
        self.fail_emits = False

    async def emit(self, event, data=None, to=None, room=None, skip_sid=None, **kwargs):
        if self.fail_emits:
            msg = "transport closed"
            raise ConnectionError(msg)
        if to is not None:
            delivered = [to]
        elif room is not None:
            delivered = sorted(self.rooms.get(room, set()) - {skip_sid})
        else:
            delivered = sorted(self.known_sids() - {skip_sid})
        self.emitted.append(
            {
                "event": event,
                "data": data,
                "to": to,
                "room": room,
                "skip_sid": skip_sid,
                "delivered": delivered,
            },
        )

    async def save_session(self, sid, session, **kwargs):
        self.sessions[sid] = dict(session)

    async def get_session(self, sid, **kwargs):
        return self.sessions.get(sid, {})

    async def enter_room(self, sid, room, **kwargs):
        self.rooms[room].add(sid)

    def known_sids(self):
        return set(self.sessions).union(*self.rooms.values())

    def events(self, name):
        return [e for e in self.emitted if e["event"] == name]

    def received(self, sid, name):
        """Payloads of ``name`` events that reached ``sid``."""
        return [e["data"] for e in self.events(name) if sid in e["delivered"]]


@pytest.fixture
def fake_sio(monkeypatch):
    server = RecordingServer()
    monkeypatch.setattr(realtime, "sio", server)
    return server


@pytest.fixture
def session_for(fake_sio):
    def _session(sid, user_id, neighborhood_id=1, display_name="Alex Kim"):
        fake_sio.sessions[sid] = {
            "user_id": user_id,
            "neighborhood_id": neighborhood_id,
            "display_name": display_name,
        }

    return _session
