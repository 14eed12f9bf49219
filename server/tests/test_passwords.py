# server/tests/test_passwords.py

from core.passwords import hash_password, verify_password


class TestPasswordHasher:

    def test_hash_is_not_plaintext(self):
        digest = hash_password("password123")
        assert digest != "password123"
        assert digest.startswith("$2")

    def test_hash_uses_fresh_salt(self):
        assert hash_password("password123") != hash_password("password123")

    def test_verify_matches_original(self):
        digest = hash_password("password123")
        assert verify_password("password123", digest) is True

    def test_verify_rejects_other_password(self):
        digest = hash_password("password123")
        assert verify_password("password124", digest) is False

    def test_verify_rejects_missing_or_malformed_digest(self):
        assert verify_password("password123", "") is False
        assert verify_password("password123", None) is False
        assert verify_password("password123", "not-a-bcrypt-hash") is False
