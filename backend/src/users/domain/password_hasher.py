from typing import Protocol


class PasswordHasher(Protocol):
    """One-way salted password hashing.

    Two calls to ``hash`` with the same plaintext return different digests,
    so digests must only ever be compared through ``verify``.
    """

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, digest: str) -> bool: ...
