"""Credential lifecycle and ceremony orchestration for the `passkeys` app."""

from .authentication import AuthenticationOrchestrator
from .challenges import AUTHENTICATION, REGISTRATION, ChallengeStore, challenge_store
from .registration import RegistrationOrchestrator
from .repository import CredentialRepository, PasskeyCredential, credential_repository
from .sessions import SessionIssuer, session_issuer
from .verifier import (
    AuthenticationResult,
    CeremonyOptions,
    Fido2Verifier,
    RegistrationResult,
    Verifier,
    fido2_verifier,
)

__all__ = [
    "AUTHENTICATION",
    "REGISTRATION",
    "AuthenticationOrchestrator",
    "AuthenticationResult",
    "CeremonyOptions",
    "ChallengeStore",
    "CredentialRepository",
    "Fido2Verifier",
    "PasskeyCredential",
    "RegistrationOrchestrator",
    "RegistrationResult",
    "SessionIssuer",
    "Verifier",
    "challenge_store",
    "credential_repository",
    "fido2_verifier",
    "session_issuer",
]
