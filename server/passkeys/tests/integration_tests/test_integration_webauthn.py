from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from passkeys.services import credential_repository
from passkeys.tests.authenticator import SoftwareAuthenticator
from passkeys.utils.encoding import b64url_encode


class Fido2CeremonyIntegrationTest(TestCase):
    """Both ceremonies over HTTP, verified by python-fido2 against a software authenticator."""

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.authenticator = SoftwareAuthenticator(credential_id=b"alice-credential")

    def _options(self, path, user_name="alice"):
        response = self.client.get(path, {"userName": user_name})
        self.assertEqual(response.status_code, 200)
        return response.json()["options"]

    def _register(self, authenticator, user_name="alice"):
        options = self._options("/attestation/options", user_name)
        body = authenticator.register(options)
        return self.client.post("/attestation/result", {"userName": user_name, "body": body}, format="json")

    def _authenticate(self, authenticator, counter=None, user_name="alice"):
        options = self._options("/assertion/options", user_name)
        body = authenticator.authenticate(options, counter=counter)
        response = self.client.post("/assertion/result", {"userName": user_name, "body": body}, format="json")
        return body, response

    def test_options_are_webauthn_json(self):
        options = self._options("/attestation/options")
        public_key = options["publicKey"]

        self.assertIsInstance(public_key["challenge"], str)
        self.assertIsInstance(public_key["user"]["id"], str)
        self.assertEqual(public_key["rp"], {"name": "TestWebAuthn", "id": "localhost"})
        self.assertEqual(public_key["authenticatorSelection"]["residentKey"], "preferred")

    def test_register_authenticate_replay_and_stale_counter(self):
        registered = self._register(self.authenticator)
        self.assertEqual(registered.status_code, 200)
        self.assertEqual(registered.json(), {"verified": True})

        passkeys = credential_repository.list_by_user("alice")
        self.assertEqual(len(passkeys), 1)
        self.assertEqual(passkeys[0].id, "alice/00000000-0000-0000-0000-000000000000")
        self.assertEqual(passkeys[0].credential_id, b"alice-credential")
        self.assertEqual(passkeys[0].counter, 0)

        body, response = self._authenticate(self.authenticator)
        self.assertEqual(response.json(), {"verified": True})
        self.assertIn("session_id", response.cookies)
        self.assertEqual(credential_repository.list_by_user("alice")[0].counter, 1)

        restricted = self.client.get("/restricted")
        self.assertEqual(restricted.status_code, 200)
        self.assertEqual(restricted.json(), {"message": "Welcome, alice!"})

        replay = self.client.post("/assertion/result", {"userName": "alice", "body": body}, format="json")
        self.assertEqual(replay.status_code, 200)
        self.assertEqual(replay.json(), {"verified": False, "error": "Authentication failed."})

        _, stale = self._authenticate(self.authenticator, counter=1)
        self.assertEqual(stale.status_code, 200)
        self.assertFalse(stale.json()["verified"])
        self.assertEqual(credential_repository.list_by_user("alice")[0].counter, 1)

    def test_second_registration_excludes_enrolled_credential(self):
        self._register(self.authenticator)

        options = self._options("/attestation/options")

        self.assertEqual(
            [c["id"] for c in options["publicKey"]["excludeCredentials"]],
            [b64url_encode(b"alice-credential")],
        )

    def test_wrong_origin_is_rejected(self):
        self._register(self.authenticator)
        self.authenticator.origin = "https://evil.example"

        _, response = self._authenticate(self.authenticator)

        self.assertFalse(response.json()["verified"])
        self.assertNotIn("session_id", response.cookies)
        self.assertEqual(credential_repository.list_by_user("alice")[0].counter, 0)

    def test_other_authenticator_cannot_sign_for_enrolled_credential(self):
        self._register(self.authenticator)
        impostor = SoftwareAuthenticator(credential_id=b"alice-credential")

        _, response = self._authenticate(impostor)

        self.assertFalse(response.json()["verified"])
        self.assertEqual(credential_repository.list_by_user("alice")[0].counter, 0)

    def test_registration_with_wrong_origin_is_rejected(self):
        self.authenticator.origin = "https://evil.example"

        response = self._register(self.authenticator)

        self.assertEqual(response.json(), {"verified": False, "error": "Registration failed."})
        self.assertEqual(credential_repository.list_by_user("alice"), [])
