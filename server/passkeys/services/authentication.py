"""Authentication ceremony: issue request options, then verify possession."""
from __future__ import annotations

import dataclasses
import logging

from django.conf import settings

from passkeys.services.challenges import AUTHENTICATION, ChallengeStore
from passkeys.services.repository import CredentialRepository
from passkeys.services.verifier import Verifier
from passkeys.utils import NoPasskeyError
from passkeys.utils.encoding import asserted_credential_id

logger = logging.getLogger(__name__)


class AuthenticationOrchestrator:
    """Drive the two round trips of an authentication ceremony."""

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

    def begin_authentication(self, user_name: str) -> dict:
        # An empty allow-list is valid; discoverable credentials may still answer.
        passkeys = self.credentials.list_by_user(user_name)
        ceremony = self.verifier.authentication_options(
            self.rp_id,
            [passkey.credential_id for passkey in passkeys],
        )
        self.challenges.put(AUTHENTICATION, user_name, ceremony.challenge)
        logger.info("Issued authentication challenge for %s", user_name)
        return ceremony.options

    def complete_authentication(self, user_name: str, response) -> bool:
        """
        Verify an authentication response for *user_name*.

        Returns ``False`` without touching storage when the response does not
        verify. On success the passkey's counter is advanced to the value the
        authenticator asserted.

        Raises NoChallengeError or NoPasskeyError.
        """
        challenge = self.challenges.take(AUTHENTICATION, user_name)

        credential_id = asserted_credential_id(response)
        passkey = next(
            (p for p in self.credentials.list_by_user(user_name) if p.credential_id == credential_id),
            None,
        )
        if passkey is None:
            logger.info("Asserted credential is not enrolled to %s", user_name)
            raise NoPasskeyError(user_name)

        result = self.verifier.verify_authentication(
            response,
            challenge,
            self.origin,
            self.rp_id,
            passkey.credential_id,
            passkey.public_key,
            passkey.counter,
        )
        if not result.verified:
            logger.info("Authentication for %s was not verified", user_name)
            return False

        if result.new_counter <= passkey.counter:
            logger.warning(
                "Rejected non-increasing counter for %s (stored=%s, asserted=%s)",
                passkey.id,
                passkey.counter,
                result.new_counter,
            )
            return False

        self.credentials.update_counter(dataclasses.replace(passkey, counter=result.new_counter))
        logger.info("Authenticated %s with passkey %s", user_name, passkey.id)
        return True
