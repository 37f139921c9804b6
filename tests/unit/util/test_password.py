"""Unit tests for password hashing."""

from credo.config import AuthSettings
from credo.util.password import hash_password, verify_password


class TestPasswordHashing:
    """Tests for hash_password() and verify_password()."""

    def test_hash_is_bcrypt_and_salted(self):
        settings = AuthSettings(bcrypt_rounds=4)

        first = hash_password("s3cret-pass", settings)
        second = hash_password("s3cret-pass", settings)

        assert first.startswith("$2b$04$")
        assert first != second

    def test_verify_round_trip(self):
        password_hash = hash_password("s3cret-pass", AuthSettings(bcrypt_rounds=4))

        assert verify_password("s3cret-pass", password_hash)
        assert not verify_password("S3cret-pass", password_hash)

    def test_verify_without_hash(self):
        """Users without a local password never match."""
        assert not verify_password("anything", None)
        assert not verify_password("", None)

    def test_verify_malformed_hash(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")

    def test_long_password_fully_significant(self):
        """Characters past bcrypt's 72-byte input limit still count."""
        password_hash = hash_password("x" * 100, AuthSettings(bcrypt_rounds=4))

        assert verify_password("x" * 100, password_hash)
        assert not verify_password("x" * 72, password_hash)
        assert not verify_password("x" * 99 + "y", password_hash)

    def test_multibyte_password(self):
        password = "pässwörd-" * 10  # well over 72 bytes in UTF-8
        password_hash = hash_password(password, AuthSettings(bcrypt_rounds=4))

        assert verify_password(password, password_hash)
