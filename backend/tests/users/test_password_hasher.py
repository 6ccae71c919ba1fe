import pytest

from shared.exceptions import ValidationError
from users.infrastructure.bcrypt_hasher import BcryptPasswordHasher


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


def test_hash_then_verify(hasher):
    digest = hasher.hash("password123")
    assert digest != "password123"
    assert hasher.verify("password123", digest)


def test_verify_wrong_password(hasher):
    digest = hasher.hash("password123")
    assert not hasher.verify("password124", digest)


def test_hash_is_salted(hasher):
    assert hasher.hash("password123") != hasher.hash("password123")


def test_hash_uses_configured_rounds():
    digest = BcryptPasswordHasher(rounds=5).hash("password123")
    assert digest.startswith("$2b$05$")


@pytest.mark.parametrize("plaintext", ["", None])
def test_hash_rejects_empty(hasher, plaintext):
    with pytest.raises(ValidationError) as exc_info:
        hasher.hash(plaintext)
    assert exc_info.value.field == "password"


def test_verify_empty_inputs_return_false(hasher):
    digest = hasher.hash("password123")
    assert hasher.verify("", digest) is False
    assert hasher.verify(None, digest) is False
    assert hasher.verify("password123", "") is False
    assert hasher.verify("password123", None) is False


def test_verify_malformed_digest_returns_false(hasher):
    assert hasher.verify("password123", "not-a-bcrypt-digest") is False


def test_long_password_is_accepted(hasher):
    long_password = "p" * 100
    digest = hasher.hash(long_password)
    assert hasher.verify(long_password, digest)


def test_long_passwords_differing_after_72_bytes(hasher):
    digest = hasher.hash("p" * 72 + "A")
    assert hasher.verify("p" * 72 + "A", digest)
    assert not hasher.verify("p" * 72 + "B", digest)
