"""Credential repository backed by the Django ORM."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.utils import timezone

from passkeys.models import Passkey
from passkeys.utils import ConflictError, NotFoundError
from passkeys.utils.encoding import b64url_decode, b64url_encode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PasskeyCredential:
    """One enrolled credential, detached from its database row."""

    id: str
    credential_id: bytes
    public_key: bytes
    user_name: str
    counter: int


def _to_credential(row: Passkey) -> PasskeyCredential:
    return PasskeyCredential(
        id=row.id,
        credential_id=b64url_decode(row.credential_id),
        public_key=b64url_decode(row.public_key),
        user_name=row.user_name,
        counter=row.counter,
    )


class CredentialRepository:
    """Persist and retrieve :class:`PasskeyCredential` records."""

    def list_by_user(self, user_name: str) -> list[PasskeyCredential]:
        rows = Passkey.objects.filter(user_name=user_name).order_by("created_at", "id")
        return [_to_credential(row) for row in rows]

    def get(self, passkey_id: str) -> PasskeyCredential:
        try:
            return _to_credential(Passkey.objects.get(pk=passkey_id))
        except Passkey.DoesNotExist as exc:
            raise NotFoundError(passkey_id) from exc

    def insert(self, credential: PasskeyCredential) -> None:
        """Store a new passkey; duplicate ids or credential ids raise :class:`ConflictError`."""
        try:
            with transaction.atomic():
                Passkey.objects.create(
                    id=credential.id,
                    credential_id=b64url_encode(credential.credential_id),
                    public_key=b64url_encode(credential.public_key),
                    user_name=credential.user_name,
                    counter=credential.counter,
                )
        except IntegrityError as exc:
            logger.info("Rejected duplicate passkey %s", credential.id)
            raise ConflictError(credential.id) from exc

    def update_counter(self, credential: PasskeyCredential) -> None:
        # Queryset.update skips auto_now, so the timestamp is set here.
        updated = Passkey.objects.filter(pk=credential.id).update(
            counter=credential.counter,
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFoundError(credential.id)


credential_repository = CredentialRepository()
