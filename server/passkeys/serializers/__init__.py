"""Serializer package for the `passkeys` Django app."""

from .ceremony import CeremonyResultSerializer, UserNameSerializer

__all__ = [
    "CeremonyResultSerializer",
    "UserNameSerializer",
]
