"""Tests for password hashing."""

from storefront.core.security import HASH_SCHEME, hash_password, verify_password


class TestPasswordHashing:
    """Tests for hash_password / verify_password."""

    def test_correct_password_verifies(self) -> None:
        """A hash verifies against the password it was made from."""
        hashed = hash_password("correct horse")
        assert hashed.startswith(f"{HASH_SCHEME}$")
        assert verify_password("correct horse", hashed)

    def test_wrong_password_rejected(self) -> None:
        """A different password does not verify."""
        hashed = hash_password("correct horse")
        assert not verify_password("battery staple", hashed)

    def test_salt_differs_per_hash(self) -> None:
        """Hashing the same password twice gives different hashes."""
        assert hash_password("same") != hash_password("same")

    def test_iterations_are_stored(self) -> None:
        """The iteration count is part of the stored hash."""
        _, iterations, _, _ = hash_password("pw").split("$")
        assert int(iterations) > 0

    def test_malformed_hash_rejected(self) -> None:
        """Garbage, foreign schemes and bad encodings verify as False."""
        assert not verify_password("pw", "not-a-hash")
        assert not verify_password("pw", "bcrypt$1$abc$def")
        assert not verify_password("pw", f"{HASH_SCHEME}$many$abc$def")
        assert not verify_password("pw", f"{HASH_SCHEME}$1000$%%%$def")
