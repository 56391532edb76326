from django.db import models


class Passkey(models.Model):
    """WebAuthn passkey enrolled for a user name"""

    id = models.CharField(
        max_length=255,
        primary_key=True,
        help_text="User name joined with the authenticator AAGUID"
    )
    credential_id = models.CharField(
        max_length=1400,
        unique=True,
        help_text="Authenticator-assigned credential ID (base64url)"
    )
    public_key = models.TextField(
        help_text="CBOR-encoded COSE public key (base64url)"
    )
    user_name = models.CharField(
        max_length=150,
        db_index=True,
        help_text="Owning user name"
    )
    counter = models.PositiveBigIntegerField(
        default=0,
        help_text="Signature counter for cloned-authenticator detection"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'passkeys'
        indexes = [
            models.Index(fields=['user_name', 'created_at'], name='passkeys_user_created_idx'),
        ]

    def __str__(self):
        return self.id
