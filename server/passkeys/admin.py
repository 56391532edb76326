from django.contrib import admin

from passkeys.models import Passkey


@admin.register(Passkey)
class PasskeyAdmin(admin.ModelAdmin):
    """Admin for Passkey model. Credential material is read-only."""

    list_display = ["id", "user_name", "counter", "created_at", "updated_at"]
    list_filter = ["created_at", "updated_at"]
    search_fields = ["id", "user_name", "credential_id"]
    readonly_fields = ["id", "credential_id", "public_key", "counter", "created_at", "updated_at"]

    fieldsets = (
        (None, {"fields": ("id", "user_name")}),
        ("Credential Data", {"fields": ("credential_id", "public_key", "counter")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    def has_add_permission(self, request):
        """Passkeys are only created by a verified registration ceremony."""
        return False
