import logging

from django.conf import settings
from rest_framework import status
from django.middleware.csrf import get_token
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from passkeys.serializers import CeremonyResultSerializer, UserNameSerializer
from passkeys.services import (
    AuthenticationOrchestrator,
    RegistrationOrchestrator,
    challenge_store,
    credential_repository,
    fido2_verifier,
    session_issuer,
)
from passkeys.utils import PasskeyError

logger = logging.getLogger(__name__)

REGISTRATION_FAILED = "Registration failed."
AUTHENTICATION_FAILED = "Authentication failed."

registration = RegistrationOrchestrator(
    credentials=credential_repository,
    challenges=challenge_store,
    verifier=fido2_verifier,
)
authentication = AuthenticationOrchestrator(
    credentials=credential_repository,
    challenges=challenge_store,
    verifier=fido2_verifier,
)


def _options_error():
    return Response(
        {"status": "error", "error": "userName is required"},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _result_error():
    return Response(
        {"verified": False, "error": "userName and body are required"},
        status=status.HTTP_400_BAD_REQUEST,
    )


@api_view(["GET"])
@permission_classes([AllowAny])
@authentication_classes([])
def registration_options(request):
    """
    Start a registration ceremony.

    GET /attestation/options?userName=alice

    Returns:
    {
        "status": "success",
        "options": {"publicKey": {...}}
    }
    """
    serializer = UserNameSerializer(data=request.query_params)
    if not serializer.is_valid():
        return _options_error()

    options = registration.begin_registration(serializer.validated_data["userName"])
    return Response({"status": "success", "options": options})


@api_view(["POST"])
@permission_classes([AllowAny])
@authentication_classes([])
def registration_result(request):
    """
    Finish a registration ceremony.

    POST /attestation/result
    {
        "userName": "alice",
        "body": {...}  # RegistrationResponseJSON from the browser
    }

    Every failure answers with the same generic message; the precise cause is
    only logged.
    """
    serializer = CeremonyResultSerializer(data=request.data)
    if not serializer.is_valid():
        return _result_error()

    user_name = serializer.validated_data["userName"]
    try:
        registration.complete_registration(user_name, serializer.validated_data["body"])
    except PasskeyError as exc:
        logger.info("Registration failed for %s: %s", user_name, exc)
        return Response({"verified": False, "error": REGISTRATION_FAILED})

    return Response({"verified": True})


@api_view(["GET"])
@permission_classes([AllowAny])
@authentication_classes([])
def authentication_options(request):
    """
    Start an authentication ceremony.

    GET /assertion/options?userName=alice
    """
    serializer = UserNameSerializer(data=request.query_params)
    if not serializer.is_valid():
        return _options_error()

    options = authentication.begin_authentication(serializer.validated_data["userName"])
    return Response({"status": "success", "options": options})


@api_view(["POST"])
@permission_classes([AllowAny])
@authentication_classes([])
def authentication_result(request):
    """
    Finish an authentication ceremony and issue a session on success.

    POST /assertion/result
    {
        "userName": "alice",
        "body": {...}  # AuthenticationResponseJSON from the browser
    }

    A processed but rejected ceremony is still a 200 with ``verified: false``.
    """
    serializer = CeremonyResultSerializer(data=request.data)
    if not serializer.is_valid():
        return _result_error()

    user_name = serializer.validated_data["userName"]
    try:
        verified = authentication.complete_authentication(user_name, serializer.validated_data["body"])
    except PasskeyError as exc:
        logger.info("Authentication failed for %s: %s", user_name, exc)
        verified = False

    if not verified:
        return Response({"verified": False, "error": AUTHENTICATION_FAILED})

    session_id = session_issuer.issue_session(user_name)
    # Unsafe requests made with the session must echo this CSRF token.
    get_token(request)
    response = Response({"verified": True})
    response.set_cookie(
        settings.PASSKEYS_SESSION_COOKIE_NAME,
        session_id,
        max_age=session_issuer.ttl_seconds,
        path="/",
        secure=settings.PASSKEYS_SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="None",
    )
    return response


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def restricted(request):
    """Greet the caller of a valid passkey session; 401 otherwise."""
    return Response({"message": f"Welcome, {request.user.user_name}!"})


@api_view(["POST"])
@permission_classes([AllowAny])
def session_logout(request):
    """
    Revoke the caller's passkey session and delete its cookie.

    POST /session/logout

    With a live session the request must carry the CSRF token (X-CSRFToken
    header) issued alongside the session cookie.
    """
    cookie_name = settings.PASSKEYS_SESSION_COOKIE_NAME
    session_id = request.COOKIES.get(cookie_name)
    if session_id:
        session_issuer.revoke_session(session_id)

    response = Response({"message": "Successfully logged out"})
    response.delete_cookie(cookie_name, path="/", samesite="None")
    return response
