from django.test import SimpleTestCase

from passkeys.utils.encoding import asserted_credential_id, b64url_decode, b64url_encode


class EncodingTest(SimpleTestCase):
    def test_b64url_is_unpadded(self):
        self.assertEqual(b64url_encode(b"C1"), "QzE")
        self.assertEqual(b64url_decode("QzE"), b"C1")
        self.assertEqual(b64url_decode("QzE="), b"C1")

    def test_asserted_credential_id_prefers_raw_id(self):
        self.assertEqual(asserted_credential_id({"id": "QjE", "rawId": "QzE"}), b"C1")

    def test_asserted_credential_id_accepts_byte_arrays(self):
        self.assertEqual(asserted_credential_id({"rawId": [67, 49]}), b"C1")

    def test_asserted_credential_id_missing(self):
        self.assertIsNone(asserted_credential_id({}))
        self.assertIsNone(asserted_credential_id({"id": 12}))
        self.assertIsNone(asserted_credential_id("not-a-response"))
