import pytest

from inmo_platform.inmo_platform.inmo_service.errors import InvalidInput, ValidationError
from inmo_platform.inmo_platform.inmo_service.hashing import PasswordHasher


def test_hash_is_salted_and_both_digests_verify(hasher):
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != second
    assert "secret123" not in first
    assert hasher.verify(first, "secret123")
    assert hasher.verify(second, "secret123")


def test_verify_rejects_wrong_password(hasher):
    digest = hasher.hash("secret123")
    assert hasher.verify(digest, "secret124") is False


def test_verify_rejects_malformed_digest(hasher):
    assert hasher.verify("not-a-real-digest", "secret123") is False
    assert hasher.verify("", "secret123") is False


def test_verify_rejects_empty_plaintext(hasher):
    digest = hasher.hash("secret123")
    assert hasher.verify(digest, "") is False


@pytest.mark.parametrize("plaintext", ["", "short", "x" * 73, "é" * 37])
def test_hash_rejects_out_of_range_input(hasher, plaintext):
    with pytest.raises(InvalidInput):
        hasher.hash(plaintext)


def test_hash_accepts_boundary_lengths(hasher):
    assert hasher.verify(hasher.hash("x" * 8), "x" * 8)
    assert hasher.verify(hasher.hash("x" * 72), "x" * 72)


def test_invalid_input_is_a_validation_error():
    assert issubclass(InvalidInput, ValidationError)


def test_settings_control_length_policy(settings):
    settings.PASSWORD_MIN_LENGTH = 4
    hasher = PasswordHasher.from_settings(settings)
    digest = hasher.hash("abcd")
    assert hasher.verify(digest, "abcd")
    assert digest.startswith("$pbkdf2-sha256$1000$")
