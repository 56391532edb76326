from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Passkey",
            fields=[
                (
                    "id",
                    models.CharField(
                        help_text="User name joined with the authenticator AAGUID",
                        max_length=255,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "credential_id",
                    models.CharField(
                        help_text="Authenticator-assigned credential ID (base64url)",
                        max_length=1400,
                        unique=True,
                    ),
                ),
                (
                    "public_key",
                    models.TextField(help_text="CBOR-encoded COSE public key (base64url)"),
                ),
                (
                    "user_name",
                    models.CharField(db_index=True, help_text="Owning user name", max_length=150),
                ),
                (
                    "counter",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Signature counter for cloned-authenticator detection",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "passkeys",
                "indexes": [
                    models.Index(fields=["user_name", "created_at"], name="passkeys_user_created_idx"),
                ],
            },
        ),
    ]
