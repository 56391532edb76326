from .exceptions import (
    exception_handler,
    format_error,
    PasskeyError,
    NoChallengeError,
    NoPasskeyError,
    VerificationError,
    ConflictError,
    NotFoundError,
)

__all__ = [
    "exception_handler",
    "format_error",
    "PasskeyError",
    "NoChallengeError",
    "NoPasskeyError",
    "VerificationError",
    "ConflictError",
    "NotFoundError",
]
