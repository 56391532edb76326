"""Database models exposed by the `passkeys` Django app."""

from .passkey import Passkey

__all__ = [
    "Passkey",
]
