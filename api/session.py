"""In-memory registry of signed training sessions."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Annotated
from uuid import uuid4

from fastapi import Header, HTTPException
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config
from core.statistics.session import SessionTracker
from core.training import TrainingSession

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def new_training_session() -> TrainingSession:
    """Build a training session with the configured rules and analytics."""
    return TrainingSession(
        rules=config.game.to_rules(),
        tracker=SessionTracker(
            max_history_entries=config.session.max_history_entries,
            skill_min_decisions=config.session.skill_min_decisions,
        ),
    )


@dataclass
class SessionEntry:
    """A live training session and the lock serialising its requests."""

    training: TrainingSession
    expires_at: datetime
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class InMemorySessionStore:
    """Training sessions held in process memory with a sliding TTL."""

    def __init__(self, signer: SessionSigner | None = None, ttl: int | None = None) -> None:
        self._signer = signer or get_session_signer()
        self._ttl = ttl or config.session_ttl
        self._sessions: dict[str, SessionEntry] = {}

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    def create(self, training: TrainingSession | None = None) -> str:
        """
        Register a new training session, dropping any that have expired.

        Returns:
            A signed token identifying the session
        """
        self.cleanup_expired()
        session_id = str(uuid4())
        self._sessions[session_id] = SessionEntry(
            training=training or new_training_session(),
            expires_at=self._expiry(),
        )
        logger.info("Created session %s", session_id)
        return self._signer.sign(session_id)

    def get(self, token: str) -> SessionEntry | None:
        """Look up a session by signed token, refreshing its expiry."""
        session_id = self._signer.unsign(token, max_age=self._ttl)
        if session_id is None:
            return None

        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        if entry.expires_at < datetime.now():
            self.delete(token)
            return None

        entry.expires_at = self._expiry()
        return entry

    def delete(self, token: str) -> None:
        """Delete a session. Unknown tokens are ignored."""
        session_id = self._signer.unsign(token, max_age=self._ttl)
        if session_id is not None:
            self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [sid for sid, entry in self._sessions.items() if entry.expires_at < now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Expired %d session(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
_session_store: InMemorySessionStore | None = None


def get_session_store() -> InMemorySessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


def reset_session_store() -> None:
    """Drop every session."""
    global _session_store
    _session_store = None


def require_session(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> SessionEntry:
    """Resolve the ``X-Session-ID`` header to a live session."""
    entry = get_session_store().get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return entry
