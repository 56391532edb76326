from urllib.parse import urlparse

from django.apps import AppConfig
from django.conf import settings
from django.core.checks import Error, Tags, Warning, register


def check_relying_party(app_configs, **kwargs):
    """
    Catch relying-party settings that would make every ceremony fail verification.
    """
    issues = []
    rp_id = settings.PASSKEYS_RP_ID
    parsed = urlparse(settings.PASSKEYS_ORIGIN)

    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        issues.append(
            Error(
                f"PASSKEYS_ORIGIN {settings.PASSKEYS_ORIGIN!r} is not an http(s) origin.",
                hint="Set PASSKEYS_ORIGIN to the exact origin the browser reports, e.g. https://example.com",
                id="passkeys.E001",
            )
        )
    elif parsed.hostname != rp_id and not parsed.hostname.endswith(f".{rp_id}"):
        issues.append(
            Error(
                f"PASSKEYS_ORIGIN host {parsed.hostname!r} is not within PASSKEYS_RP_ID {rp_id!r}.",
                hint="The RP id must equal the origin host or be one of its parent domains.",
                id="passkeys.E002",
            )
        )

    if settings.PASSKEYS_CHALLENGE_TTL_SECONDS <= 0:
        issues.append(
            Warning(
                "PASSKEYS_CHALLENGE_TTL_SECONDS is not positive; challenges expire before they can be used.",
                hint="Use a short TTL such as 300 seconds.",
                id="passkeys.W001",
            )
        )

    return issues


class PasskeysConfig(AppConfig):
    name = "passkeys"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self) -> None:
        register(check_relying_party, Tags.security)
