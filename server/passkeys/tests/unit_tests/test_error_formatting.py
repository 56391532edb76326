from django.test import SimpleTestCase
from rest_framework.test import APIClient

from passkeys.utils import format_error


class ErrorFormattingTest(SimpleTestCase):
    def test_format_error_envelope(self):
        payload = format_error(code="not_authenticated", message="Authentication credentials were not provided.")

        self.assertEqual(payload["error"]["code"], "NOT_AUTHENTICATED")
        self.assertEqual(payload["error"]["details"], {})

    def test_unauthenticated_restricted_uses_envelope(self):
        response = APIClient().get("/restricted")

        self.assertEqual(response.status_code, 401)
        self.assertIn("code", response.data["error"])
        self.assertIn("message", response.data["error"])
        self.assertIn("details", response.data["error"])
        self.assertEqual(response["WWW-Authenticate"], "Session")

    def test_wrong_method_uses_envelope(self):
        response = APIClient().get("/attestation/result")

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.data["error"]["code"], "METHOD_NOT_ALLOWED")
