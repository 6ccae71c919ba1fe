from users.application.dto import CreateUserRequest
from users.domain.entities import User
from users.domain.normalization import normalize
from users.domain.password_hasher import PasswordHasher
from users.domain.validation import validate_user_fields


class UserFactory:
    """Builds unsaved users from raw input.

    This is the only place a plaintext password becomes a stored digest
    during creation. The returned user has no id and no timestamps.
    """

    def __init__(self, hasher: PasswordHasher):
        self.hasher = hasher

    def build(self, request: CreateUserRequest) -> User:
        return self.build_from_fields(request.username, request.email, request.password)

    def build_from_fields(self, username: str, email: str, password: str) -> User:
        validate_user_fields(username, email, password)
        return User(
            username=normalize(username),
            email=normalize(email),
            password_hash=self.hasher.hash(password),
            is_active=True,
        )
