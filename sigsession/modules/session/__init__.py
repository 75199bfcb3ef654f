"""
Session Module - Black Box Interface

Purpose: Manage signature-authenticated session lifecycle
Interface: create_session(), get_session(), end_session()
Hidden: Key layout, serialization, TTL management

Replaceable with any session backend that offers per-key TTL.
"""

from .session import (
    SESSION_DURATION_MS,
    SessionModule,
    SessionRecord,
    SessionView,
    session_key,
)

__all__ = [
    "SESSION_DURATION_MS",
    "SessionModule",
    "SessionRecord",
    "SessionView",
    "session_key",
]
