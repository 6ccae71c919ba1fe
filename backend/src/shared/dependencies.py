from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import settings
from shared.infrastructure.database import async_session
from users.application.factory import UserFactory
from users.application.mapper import UserMapper
from users.application.services import UserService
from users.domain.password_hasher import PasswordHasher
from users.infrastructure.bcrypt_hasher import BcryptPasswordHasher
from users.infrastructure.user_repository import DbUserRepository


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(
        repository=DbUserRepository(db),
        factory=UserFactory(hasher),
        mapper=UserMapper(),
        hasher=hasher,
    )
