from typing import Protocol

from users.domain.entities import User


class UserRepository(Protocol):
    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def exists_by_username(self, username: str) -> bool: ...

    async def exists_by_email(self, email: str) -> bool: ...

    async def list_all(self) -> list[User]: ...

    async def list_active(self) -> list[User]: ...

    async def search_by_username(self, fragment: str) -> list[User]: ...

    async def list_by_email_domain(self, domain: str) -> list[User]: ...

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> User: ...

    async def delete(self, user_id: int) -> None: ...
