"""Registration ceremony: issue creation options, then verify and enroll."""
from __future__ import annotations

import logging

from django.conf import settings

from passkeys.services.challenges import REGISTRATION, ChallengeStore
from passkeys.services.repository import CredentialRepository, PasskeyCredential
from passkeys.services.verifier import Verifier
from passkeys.utils import VerificationError

logger = logging.getLogger(__name__)


class RegistrationOrchestrator:
    """Drive the two round trips of a registration ceremony."""

    def __init__(
        self,
        credentials: CredentialRepository,
        challenges: ChallengeStore,
        verifier: Verifier,
        rp_id: str | None = None,
        origin: str | None = None,
    ):
        self.credentials = credentials
        self.challenges = challenges
        self.verifier = verifier
        self.rp_id = rp_id or settings.PASSKEYS_RP_ID
        self.origin = origin or settings.PASSKEYS_ORIGIN

    def begin_registration(self, user_name: str) -> dict:
        """
        Return creation options for *user_name* and remember their challenge.

        Credentials the user already owns are listed in ``excludeCredentials``
        so the same authenticator is not enrolled twice.
        """
        existing = self.credentials.list_by_user(user_name)
        ceremony = self.verifier.registration_options(
            user_name,
            self.rp_id,
            [passkey.credential_id for passkey in existing],
        )
        self.challenges.put(REGISTRATION, user_name, ceremony.challenge)
        logger.info("Issued registration challenge for %s", user_name)
        return ceremony.options

    def complete_registration(self, user_name: str, response) -> PasskeyCredential:
        """
        Verify a registration response and store the new passkey.

        Raises NoChallengeError, VerificationError or ConflictError.
        """
        challenge = self.challenges.take(REGISTRATION, user_name)

        result = self.verifier.verify_registration(
            response,
            challenge,
            self.origin,
            self.rp_id,
        )
        if not result.verified:
            logger.info("Registration for %s was not verified", user_name)
            raise VerificationError("Registration response not verified")

        passkey = PasskeyCredential(
            id=f"{user_name}/{result.aaguid}",
            credential_id=result.credential_id,
            public_key=result.public_key,
            user_name=user_name,
            counter=result.counter,
        )
        self.credentials.insert(passkey)
        logger.info("Registered passkey %s", passkey.id)
        return passkey
