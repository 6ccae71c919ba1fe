import base64
import hashlib

import bcrypt

from shared.exceptions import ValidationError


class BcryptPasswordHasher:
    """bcrypt over a SHA-256 pre-hash of the password.

    bcrypt only reads the first 72 bytes of its input, so the password is
    first reduced to a fixed 44-byte base64 digest; every byte of a long
    password still affects the result.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValidationError("password", "Password is required")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_prehash(plaintext), salt).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return bcrypt.checkpw(_prehash(plaintext), digest.encode())
        except ValueError:
            return False


def _prehash(plaintext: str) -> bytes:
    return base64.b64encode(hashlib.sha256(plaintext.encode()).digest())
