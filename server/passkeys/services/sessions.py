"""Session records issued after a successful authentication ceremony."""
import logging
import secrets

from django.conf import settings
from django.core.cache import caches
from django.utils.connection import ConnectionProxy

logger = logging.getLogger(__name__)

SESSION_PREFIX = "passkeys:session"


def _session_key(session_id: str) -> str:
    return f"{SESSION_PREFIX}:{session_id}"


class SessionIssuer:
    """Map unpredictable session ids to user names with a bounded lifetime."""

    def __init__(self, cache=None, ttl_seconds: int | None = None):
        self.cache = cache if cache is not None else ConnectionProxy(caches, settings.PASSKEYS_CACHE_ALIAS)
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.PASSKEYS_SESSION_TTL_SECONDS

    def issue_session(self, user_name: str) -> str:
        session_id = secrets.token_urlsafe(32)
        self.cache.set(_session_key(session_id), user_name, timeout=self.ttl_seconds)
        logger.info("Issued session for %s", user_name)
        return session_id

    def resolve_session(self, session_id: str) -> str | None:
        """Return the owning user name, or ``None`` when unknown or expired."""
        if not session_id:
            return None
        return self.cache.get(_session_key(session_id))

    def revoke_session(self, session_id: str) -> bool:
        if not session_id:
            return False
        return bool(self.cache.delete(_session_key(session_id)))


session_issuer = SessionIssuer()
