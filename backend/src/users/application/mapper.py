from collections.abc import Iterable

from users.application.dto import UserResponse
from users.domain.entities import User


class UserMapper:
    def to_response(self, user: User | None) -> UserResponse | None:
        if user is None:
            return None
        return UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_response_list(self, users: Iterable[User]) -> list[UserResponse]:
        return [self.to_response(user) for user in users]
