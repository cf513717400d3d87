"""Registry of open ingredient edit sessions."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID, uuid4

from pantry_tracker.domain.errors import EditSessionNotFoundError
from pantry_tracker.services.lifecycle import Clock, EditSession, utc_now

DEFAULT_SESSION_TTL_SECONDS = 3600


@dataclass
class _SessionEntry:
    session: EditSession
    expires_at: datetime


@dataclass
class EditSessionRegistry:
    """In-memory store of edit sessions keyed by id.

    A session expires after ttl_seconds without being used; expired sessions
    are dropped when another session is opened or when they are looked up.
    """

    clock: Clock = utc_now
    ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    _entries: dict[UUID, _SessionEntry] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._entries)

    def open(self, session: EditSession) -> UUID:
        """Register a session and return its id."""
        self._evict_expired()
        session_id = uuid4()
        self._entries[session_id] = _SessionEntry(session, self._expires_at())
        return session_id

    def get(self, session_id: UUID) -> EditSession:
        """Return an open session and extend its lifetime."""
        entry = self._entries.get(session_id)
        if entry is None:
            raise EditSessionNotFoundError(f"Edit session {session_id} is not open")
        if self.clock() >= entry.expires_at:
            self._entries.pop(session_id, None)
            raise EditSessionNotFoundError(f"Edit session {session_id} has expired")
        entry.expires_at = self._expires_at()
        return entry.session

    def close(self, session_id: UUID) -> None:
        """Forget a session after it was saved or discarded."""
        if self._entries.pop(session_id, None) is None:
            raise EditSessionNotFoundError(f"Edit session {session_id} is not open")

    def _evict_expired(self) -> None:
        now = self.clock()
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]

    def _expires_at(self) -> datetime:
        return self.clock() + timedelta(seconds=self.ttl_seconds)
