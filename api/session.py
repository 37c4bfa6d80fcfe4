"""Signed session ids and the in-memory store holding each session's game."""

from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

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
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
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


class SessionStore:
    """
    Sessions keyed by signed token, each expiring ``ttl`` seconds after its
    last write. Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    def create_session_id(self) -> str:
        """Create a new signed session token."""
        return get_session_signer().sign(str(uuid4()))

    async def get(self, token: str) -> dict[str, Any] | None:
        """Get session data, or None if unknown, expired or forged."""
        if extract_session_id(token) is None or token not in self._sessions:
            return None

        data, expiry = self._sessions[token]
        if expiry < datetime.now():
            await self.delete(token)
            return None

        return data

    async def set(self, token: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data and push back its expiry."""
        expiry = datetime.now() + timedelta(seconds=ttl or config.session_ttl)
        self._sessions[token] = (data, expiry)

    async def delete(self, token: str) -> None:
        """Delete session."""
        self._sessions.pop(token, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [t for t, (_, expiry) in self._sessions.items() if expiry < now]
        for token in expired:
            del self._sessions[token]
        return len(expired)


# Global session store instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store


async def create_session(data: dict[str, Any] | None = None) -> str:
    """Create a new session and return its signed token."""
    store = get_session_store()
    await store.cleanup_expired()
    token = store.create_session_id()
    await store.set(token, data or {})
    return token


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)
