"""Single-use, short-lived challenge storage for WebAuthn ceremonies."""
import logging

from django.conf import settings
from django.core.cache import caches
from django.utils.connection import ConnectionProxy

from passkeys.utils import NoChallengeError

logger = logging.getLogger(__name__)

CHALLENGE_PREFIX = "passkeys:challenge"

REGISTRATION = "registration"
AUTHENTICATION = "authentication"


def _challenge_key(flow: str, user_name: str) -> str:
    return f"{CHALLENGE_PREFIX}:{flow}:{user_name}"


class ChallengeStore:
    """
    Keep at most one outstanding challenge per user and ceremony flow.

    ``put`` overwrites any earlier challenge for the same user and flow, so a
    new "begin" invalidates an in-flight ceremony. ``take`` deletes on read:
    among concurrent callers only the one whose delete removed the key gets
    the challenge, the others raise :class:`NoChallengeError`.
    """

    def __init__(self, cache=None, ttl_seconds: int | None = None):
        self.cache = cache if cache is not None else ConnectionProxy(caches, settings.PASSKEYS_CACHE_ALIAS)
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.PASSKEYS_CHALLENGE_TTL_SECONDS

    def put(self, flow: str, user_name: str, challenge: str) -> None:
        self.cache.set(_challenge_key(flow, user_name), challenge, timeout=self.ttl_seconds)

    def take(self, flow: str, user_name: str) -> str:
        key = _challenge_key(flow, user_name)
        challenge = self.cache.get(key)
        if challenge is None:
            raise NoChallengeError(user_name)
        if not self.cache.delete(key):
            logger.info("Lost race consuming %s challenge for %s", flow, user_name)
            raise NoChallengeError(user_name)
        return challenge


challenge_store = ChallengeStore()
