"""
In-memory session store with per-sender exclusive access.

Owns the mapping from sender identity to Session. A turn must hold
``exclusive(sender_id)`` for its whole duration, including any awaits on
the text assistant, so two turns for the same sender never interleave.
Locks are per sender: turns for different senders never contend.

Sessions live for the process lifetime. The same contract can be backed
by a keyed store later without changing the engine.

Usage:
    store = SessionStore()
    async with store.exclusive("+447700900123"):
        session = store.get_or_create("+447700900123")
        ...
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from src.schemas.session_schema import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Sender id -> Session, plus one FIFO lock per sender."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, sender_id: str) -> bool:
        return sender_id in self._sessions

    def get_or_create(self, sender_id: str) -> Session:
        """Return the sender's session, creating a default one on first contact."""
        session = self._sessions.get(sender_id)
        if session is None:
            session = Session()
            self._sessions[sender_id] = session
            logger.info("Session created")
        return session

    def reset(self, sender_id: str) -> Session:
        """Replace the sender's session with a fresh default one and return it."""
        session = Session()
        self._sessions[sender_id] = session
        logger.info("Session reset")
        return session

    def replace(self, sender_id: str, session: Session) -> None:
        """Install a given session for the sender, e.g. to roll back a failed turn."""
        self._sessions[sender_id] = session

    def discard(self, sender_id: str) -> bool:
        """Drop a sender's session together with its lock.

        Both maps are pruned here and only here, so they cannot drift apart.
        A sender with a turn running or queued is left alone and ``False``
        is returned.
        """
        if self._holders.get(sender_id):
            return False
        self._sessions.pop(sender_id, None)
        self._locks.pop(sender_id, None)
        logger.info("Session discarded")
        return True

    def _lock_for(self, sender_id: str) -> asyncio.Lock:
        # No await between lookup and insert, so this is atomic on the event loop.
        lock = self._locks.get(sender_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[sender_id] = lock
        return lock

    def is_locked(self, sender_id: str) -> bool:
        lock = self._locks.get(sender_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def exclusive(self, sender_id: str) -> AsyncIterator[None]:
        """Hold exclusive access to one sender's session for the duration of a turn."""
        lock = self._lock_for(sender_id)
        if lock.locked():
            logger.debug("Turn queued behind an in-flight turn for the same sender")
        self._holders[sender_id] = self._holders.get(sender_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[sender_id] -= 1
            if not self._holders[sender_id]:
                del self._holders[sender_id]
