"""Realtime (Socket.IO) layer shared by every domain app."""
