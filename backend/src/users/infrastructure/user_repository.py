import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import AlreadyExistsError
from users.domain.entities import User
from users.infrastructure.orm_models import UserModel

# Matches only unique violations on username/email, as reported by PostgreSQL
# (unique constraint "uq_users_email") and SQLite (UNIQUE constraint failed:
# index 'uq_users_email', or users.email for a plain column constraint).
_UNIQUE_VIOLATION = re.compile(
    r"(?:unique constraint \"uq_users_"
    r"|UNIQUE constraint failed: index 'uq_users_"
    r"|UNIQUE constraint failed: users\.)"
    r"(username|email)"
)


class DbUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def exists_by_username(self, username: str) -> bool:
        return bool(
            await self.session.scalar(
                select(exists().where(UserModel.username == username))
            )
        )

    async def exists_by_email(self, email: str) -> bool:
        return bool(
            await self.session.scalar(select(exists().where(UserModel.email == email)))
        )

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(UserModel).order_by(UserModel.id))
        return [_to_entity(m) for m in result.scalars().all()]

    async def list_active(self) -> list[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.is_active.is_(True)).order_by(UserModel.id)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def search_by_username(self, fragment: str) -> list[User]:
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.username.icontains(fragment, autoescape=True))
            .order_by(UserModel.id)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def list_by_email_domain(self, domain: str) -> list[User]:
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email.endswith(f"@{domain}", autoescape=True))
            .order_by(UserModel.id)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(model)
        async with self._unique_guard(user):
            await self.session.commit()
        await self.session.refresh(model)
        return _to_entity(model)

    async def update(self, user: User) -> User:
        async with self._unique_guard(user):
            await self.session.execute(
                update(UserModel)
                .where(UserModel.id == user.id)
                .values(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    is_active=user.is_active,
                    updated_at=user.updated_at,
                )
            )
            await self.session.commit()

        refreshed = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user.id)
            .execution_options(populate_existing=True)
        )
        return _to_entity(refreshed.scalar_one())

    async def delete(self, user_id: int) -> None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        model = result.scalar_one_or_none()
        if model:
            await self.session.delete(model)
            await self.session.commit()

    @asynccontextmanager
    async def _unique_guard(self, user: User) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as exc:
            await self.session.rollback()
            match = _UNIQUE_VIOLATION.search(str(exc.orig))
            if match is None:
                raise
            field = match.group(1)
            raise AlreadyExistsError(field, getattr(user, field)) from exc


def _to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        username=model.username,
        email=model.email,
        password_hash=model.password_hash,
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
