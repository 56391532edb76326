from passkeys.views.api_root import api_root
from passkeys.views.ceremony import (
    authentication_options,
    authentication_result,
    registration_options,
    registration_result,
    restricted,
    session_logout,
)
from passkeys.views.health import health_check

__all__ = [
    "api_root",
    "authentication_options",
    "authentication_result",
    "health_check",
    "registration_options",
    "registration_result",
    "restricted",
    "session_logout",
]
