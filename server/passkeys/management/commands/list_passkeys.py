"""Django management command listing the passkeys enrolled for a user name."""

from django.core.management.base import BaseCommand

from passkeys.models import Passkey


class Command(BaseCommand):
    """Print id, credential id, counter and creation time of each passkey."""

    help = "List passkeys enrolled for a user name"

    def add_arguments(self, parser):
        parser.add_argument("user_name")

    def handle(self, *args, **options):
        user_name = options["user_name"]
        passkeys = Passkey.objects.filter(user_name=user_name).order_by("created_at", "id")

        if not passkeys.exists():
            self.stdout.write(self.style.WARNING(f"No passkeys for {user_name}"))
            return

        for passkey in passkeys:
            self.stdout.write(
                f"{passkey.id}\t{passkey.credential_id}\tcounter={passkey.counter}\t"
                f"created={passkey.created_at.isoformat()}"
            )

        self.stdout.write(self.style.SUCCESS(f"{passkeys.count()} passkey(s) for {user_name}"))
