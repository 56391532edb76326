def exception_handler(exc, context):
    """
    Custom exception handler for DRF that returns consistent error format.
    """
    # rest_framework.views loads the authentication classes, which import
    # this package; importing it at module level would be circular.
    from rest_framework.views import exception_handler as drf_exception_handler

    response = drf_exception_handler(exc, context)

    if response:
        response.data = format_error(
            code=getattr(exc, "default_code", "error"),
            message=str(exc),
            details=(
                response.data
                if isinstance(response.data, dict)
                else {"detail": response.data}
            ),
        )

    return response


def format_error(code: str, message: str, details=None):
    return {
        "error": {
            "code": str(code).upper(),
            "message": message,
            "details": details if details is not None else {},
        }
    }


class PasskeyError(Exception):
    """Base class for ceremony and credential storage failures"""


class NoChallengeError(PasskeyError):
    """Raised when no live challenge exists for a user (missing, expired or consumed)"""
    def __init__(self, user_name):
        self.user_name = user_name
        super().__init__(f"No challenge exists for {user_name}")


class NoPasskeyError(PasskeyError):
    """Raised when the asserted credential is not enrolled to the named user"""
    def __init__(self, user_name):
        self.user_name = user_name
        super().__init__(f"No passkey exists for {user_name}")


class VerificationError(PasskeyError):
    """Raised when a ceremony response fails cryptographic or protocol checks"""
    def __init__(self, reason="Not verified"):
        self.reason = reason
        super().__init__(reason)


class ConflictError(PasskeyError):
    """Raised when inserting a passkey whose id or credential id already exists"""
    def __init__(self, passkey_id):
        self.passkey_id = passkey_id
        super().__init__(f"Passkey {passkey_id} is already registered")


class NotFoundError(PasskeyError):
    """Raised when updating or fetching a passkey that does not exist"""
    def __init__(self, passkey_id):
        self.passkey_id = passkey_id
        super().__init__(f"Passkey {passkey_id} does not exist")
