from django.core.cache import cache
from django.test import TestCase

from passkeys.services import ChallengeStore, CredentialRepository, RegistrationOrchestrator
from passkeys.tests.fakes import FakeVerifier, registration_response
from passkeys.utils import ConflictError, NoChallengeError, VerificationError

AAGUID = "adce0002-35bc-c60a-648b-0b25f1f05503"


class RegistrationOrchestratorTest(TestCase):
    def setUp(self):
        cache.clear()
        self.verifier = FakeVerifier()
        self.repository = CredentialRepository()
        self.orchestrator = RegistrationOrchestrator(
            credentials=self.repository,
            challenges=ChallengeStore(cache, ttl_seconds=300),
            verifier=self.verifier,
            rp_id="localhost",
            origin="http://localhost:8000",
        )

    def _register(self, user_name, credential_id, aaguid=AAGUID):
        options = self.orchestrator.begin_registration(user_name)
        challenge = options["publicKey"]["challenge"]
        return self.orchestrator.complete_registration(
            user_name, registration_response(credential_id, challenge, aaguid=aaguid)
        )

    def test_begin_registration_returns_options(self):
        options = self.orchestrator.begin_registration("alice")

        self.assertEqual(options["publicKey"]["challenge"], "challenge-1")
        self.assertEqual(options["publicKey"]["authenticatorSelection"]["residentKey"], "preferred")
        self.assertEqual(options["publicKey"]["authenticatorSelection"]["userVerification"], "preferred")

    def test_begin_registration_excludes_existing_credentials(self):
        self._register("alice", b"C1")

        self.orchestrator.begin_registration("alice")

        self.assertEqual(self.verifier.calls[-1], ("registration_options", "alice", "localhost", [b"C1"]))

    def test_complete_registration_stores_passkey_once(self):
        passkey = self._register("alice", b"C1")

        passkeys = self.repository.list_by_user("alice")
        self.assertEqual(passkeys, [passkey])
        self.assertEqual(passkey.id, f"alice/{AAGUID}")
        self.assertEqual(passkey.credential_id, b"C1")
        self.assertEqual(passkey.counter, 0)

    def test_complete_registration_checks_origin_and_rp_id(self):
        self._register("alice", b"C1")

        call = next(c for c in self.verifier.calls if c[0] == "verify_registration")
        self.assertEqual(call, ("verify_registration", "challenge-1", "http://localhost:8000", "localhost"))

    def test_complete_registration_without_challenge_fails(self):
        with self.assertRaises(NoChallengeError):
            self.orchestrator.complete_registration("alice", registration_response(b"C1", "challenge-1"))

        self.assertEqual(self.repository.list_by_user("alice"), [])

    def test_tampered_challenge_is_rejected_and_consumed(self):
        self.orchestrator.begin_registration("alice")

        with self.assertRaises(VerificationError):
            self.orchestrator.complete_registration("alice", registration_response(b"C1", "forged"))
        with self.assertRaises(NoChallengeError):
            self.orchestrator.complete_registration("alice", registration_response(b"C1", "challenge-1"))

        self.assertEqual(self.repository.list_by_user("alice"), [])

    def test_challenge_of_another_user_is_not_accepted(self):
        self.orchestrator.begin_registration("bob")

        with self.assertRaises(NoChallengeError):
            self.orchestrator.complete_registration("alice", registration_response(b"C1", "challenge-1"))

    def test_new_begin_invalidates_earlier_challenge(self):
        self.orchestrator.begin_registration("alice")
        self.orchestrator.begin_registration("alice")

        with self.assertRaises(VerificationError):
            self.orchestrator.complete_registration("alice", registration_response(b"C1", "challenge-1"))

    def test_duplicate_credential_conflicts(self):
        self._register("alice", b"C1")

        with self.assertRaises(ConflictError):
            self._register("alice", b"C1", aaguid="11111111-1111-1111-1111-111111111111")

        self.assertEqual(len(self.repository.list_by_user("alice")), 1)

    def test_users_may_own_several_passkeys(self):
        self._register("alice", b"C1")
        self._register("alice", b"C2", aaguid="11111111-1111-1111-1111-111111111111")

        self.assertEqual([p.credential_id for p in self.repository.list_by_user("alice")], [b"C1", b"C2"])
