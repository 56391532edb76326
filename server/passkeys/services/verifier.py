"""
WebAuthn verification capability.

The orchestrators only depend on the :class:`Verifier` protocol;
:class:`Fido2Verifier` implements it with python-fido2.
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

import fido2.features
from fido2 import cbor
from fido2.cose import CoseKey
from fido2.server import Fido2Server
from fido2.webauthn import (
    Aaguid,
    AttestedCredentialData,
    AuthenticationResponse,
    PublicKeyCredentialDescriptor,
    PublicKeyCredentialRpEntity,
    PublicKeyCredentialType,
    PublicKeyCredentialUserEntity,
    ResidentKeyRequirement,
    UserVerificationRequirement,
)

from django.conf import settings

logger = logging.getLogger(__name__)

# Options and client responses travel as WebAuthn JSON, binary fields base64url encoded.
fido2.features.webauthn_json_mapping.enabled = True


@dataclass(frozen=True)
class CeremonyOptions:
    """Options to forward to the client, plus the challenge they carry."""

    options: dict
    challenge: str


@dataclass(frozen=True)
class RegistrationResult:
    verified: bool
    credential_id: bytes = b""
    public_key: bytes = b""
    counter: int = 0
    aaguid: str = ""


@dataclass(frozen=True)
class AuthenticationResult:
    verified: bool
    new_counter: int = 0


class Verifier(Protocol):
    def registration_options(
        self, user_name: str, rp_id: str, exclude_credentials: Iterable[bytes]
    ) -> CeremonyOptions: ...

    def verify_registration(
        self, response: Any, challenge: str, expected_origin: str, expected_rp_id: str
    ) -> RegistrationResult: ...

    def authentication_options(
        self, rp_id: str, allow_credentials: Iterable[bytes]
    ) -> CeremonyOptions: ...

    def verify_authentication(
        self,
        response: Any,
        challenge: str,
        expected_origin: str,
        expected_rp_id: str,
        credential_id: bytes,
        public_key: bytes,
        counter: int,
    ) -> AuthenticationResult: ...


def _descriptors(credential_ids: Iterable[bytes]) -> list[PublicKeyCredentialDescriptor]:
    return [
        PublicKeyCredentialDescriptor(type=PublicKeyCredentialType.PUBLIC_KEY, id=credential_id)
        for credential_id in credential_ids
    ]


def _build_attested_credential(credential_id: bytes, public_key: bytes) -> AttestedCredentialData:
    cose_key = CoseKey.parse(cbor.decode(public_key))
    return AttestedCredentialData.create(Aaguid.NONE, credential_id, cose_key)


def _user_handle(user_name: str) -> bytes:
    # User handles are opaque and capped at 64 bytes.
    return hashlib.sha256(user_name.encode("utf-8")).digest()


class Fido2Verifier:
    """:class:`Verifier` backed by :class:`fido2.server.Fido2Server`."""

    def __init__(self, rp_name: str | None = None):
        self.rp_name = rp_name or settings.PASSKEYS_RP_NAME

    def _server(self, rp_id: str, expected_origin: str | None = None) -> Fido2Server:
        rp = PublicKeyCredentialRpEntity(id=rp_id, name=self.rp_name)
        if expected_origin is None:
            return Fido2Server(rp)
        return Fido2Server(rp, verify_origin=lambda origin: origin == expected_origin)

    @staticmethod
    def _state(challenge: str) -> dict:
        return {
            "challenge": challenge,
            "user_verification": UserVerificationRequirement.PREFERRED,
        }

    def registration_options(self, user_name, rp_id, exclude_credentials):
        user = PublicKeyCredentialUserEntity(
            id=_user_handle(user_name),
            name=user_name,
            display_name=user_name,
        )
        options, state = self._server(rp_id).register_begin(
            user=user,
            credentials=_descriptors(exclude_credentials),
            resident_key_requirement=ResidentKeyRequirement.PREFERRED,
            user_verification=UserVerificationRequirement.PREFERRED,
        )
        return CeremonyOptions(options=dict(options), challenge=state["challenge"])

    def verify_registration(self, response, challenge, expected_origin, expected_rp_id):
        try:
            auth_data = self._server(expected_rp_id, expected_origin).register_complete(
                self._state(challenge),
                response=response,
            )
        except Exception as exc:
            logger.info("Registration response rejected: %s", exc)
            return RegistrationResult(verified=False)

        credential_data = auth_data.credential_data
        return RegistrationResult(
            verified=True,
            credential_id=credential_data.credential_id,
            public_key=cbor.encode(credential_data.public_key),
            counter=auth_data.counter,
            aaguid=str(credential_data.aaguid),
        )

    def authentication_options(self, rp_id, allow_credentials):
        options, state = self._server(rp_id).authenticate_begin(
            credentials=_descriptors(allow_credentials),
            user_verification=UserVerificationRequirement.PREFERRED,
        )
        return CeremonyOptions(options=dict(options), challenge=state["challenge"])

    def verify_authentication(
        self,
        response,
        challenge,
        expected_origin,
        expected_rp_id,
        credential_id,
        public_key,
        counter,
    ):
        try:
            parsed = AuthenticationResponse.from_dict(response)
            credential = _build_attested_credential(credential_id, public_key)
            self._server(expected_rp_id, expected_origin).authenticate_complete(
                self._state(challenge),
                [credential],
                parsed,
            )
            new_counter = parsed.response.authenticator_data.counter
        except Exception as exc:
            logger.info("Authentication response rejected: %s", exc)
            return AuthenticationResult(verified=False)

        if new_counter <= counter:
            logger.warning(
                "Signature counter did not increase (stored=%s, asserted=%s); possible cloned authenticator",
                counter,
                new_counter,
            )
            return AuthenticationResult(verified=False, new_counter=new_counter)

        return AuthenticationResult(verified=True, new_counter=new_counter)


fido2_verifier = Fido2Verifier()
