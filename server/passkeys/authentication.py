"""DRF authentication backed by passkey session cookies."""
from django.conf import settings
from rest_framework.authentication import SessionAuthentication

from passkeys.services.sessions import session_issuer


class SessionPrincipal:
    """Request user for a caller holding a valid passkey session."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, user_name: str):
        self.user_name = user_name

    def __str__(self):
        return self.user_name


class PasskeySessionAuthentication(SessionAuthentication):
    """
    Resolve the session cookie issued after a passkey authentication.

    A missing, unknown or expired session leaves the request anonymous, so
    views guarded by ``IsAuthenticated`` answer 401. The cookie is sent
    cross-site (``SameSite=None``), so unsafe requests made with a valid
    session must pass Django's CSRF check, as with DRF's session auth.
    """

    def authenticate(self, request):
        session_id = request.COOKIES.get(settings.PASSKEYS_SESSION_COOKIE_NAME)
        if not session_id:
            return None

        user_name = session_issuer.resolve_session(session_id)
        if user_name is None:
            return None

        self.enforce_csrf(request)
        return SessionPrincipal(user_name), session_id

    def authenticate_header(self, request):
        return "Session"
