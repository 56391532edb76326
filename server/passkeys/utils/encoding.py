import base64
from typing import Any


def b64url_encode(value: bytes) -> str:
    """Encode bytes as unpadded base64url, the WebAuthn JSON convention."""
    return base64.urlsafe_b64encode(value).decode("utf-8").rstrip("=")


def b64url_decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def webauthn_json_bytes_to_bytes(value: Any) -> bytes:
    """
    Convert a JSON WebAuthn binary field into raw bytes.

    Supported inputs:
    - list[int]: JSON byte array
    - str: base64url (padding optional)
    """
    if isinstance(value, list):
        return bytes(value)

    if isinstance(value, str):
        return b64url_decode(value)

    raise ValueError("Unsupported WebAuthn binary value type")


def asserted_credential_id(response: Any) -> bytes | None:
    """
    Return the credential id a client authentication response asserts.

    ``rawId`` is preferred over ``id``; both carry the same value in
    well-formed responses. Returns ``None`` when neither can be decoded.
    """
    if not isinstance(response, dict):
        return None

    for field in ("rawId", "id"):
        value = response.get(field)
        if not value:
            continue
        try:
            return webauthn_json_bytes_to_bytes(value)
        except (ValueError, TypeError):
            continue
    return None
