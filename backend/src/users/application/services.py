from datetime import datetime, timezone

from loguru import logger

from shared.exceptions import AlreadyExistsError, NotFoundError
from users.application.dto import CreateUserRequest, UpdateUserRequest, UserResponse
from users.application.factory import UserFactory
from users.application.mapper import UserMapper
from users.domain.entities import User
from users.domain.normalization import normalize
from users.domain.password_hasher import PasswordHasher
from users.domain.repository import UserRepository
from users.domain.validation import validate_email, validate_password, validate_username


class UserService:
    """User workflows: uniqueness checks, persistence and response mapping.

    Every repository write commits on its own, so each method either fully
    persists or leaves the stored user unchanged. A unique-constraint
    violation detected at commit surfaces as ``AlreadyExistsError`` even
    when the pre-check passed.
    """

    def __init__(
        self,
        repository: UserRepository,
        factory: UserFactory,
        mapper: UserMapper,
        hasher: PasswordHasher,
    ):
        self.repository = repository
        self.factory = factory
        self.mapper = mapper
        self.hasher = hasher

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        username = normalize(request.username or "")
        email = normalize(request.email or "")
        logger.info("Creating user with username: {}", username)

        # username is checked first, so it wins when both collide
        if await self.repository.exists_by_username(username):
            logger.warning("Username already taken: {}", username)
            raise AlreadyExistsError("username", username)
        if await self.repository.exists_by_email(email):
            logger.warning("Email already registered: {}", email)
            raise AlreadyExistsError("email", email)

        user = self.factory.build(request)
        now = _utcnow()
        user.created_at = now
        user.updated_at = now

        saved = await self.repository.create(user)
        logger.info("User created with id: {}", saved.id)
        return self.mapper.to_response(saved)

    async def get_by_id(self, user_id: int) -> UserResponse:
        logger.debug("Fetching user with id: {}", user_id)
        return self.mapper.to_response(await self._get_or_raise(user_id))

    async def get_by_username(self, username: str) -> UserResponse:
        logger.debug("Fetching user with username: {}", username)
        user = await self.repository.get_by_username(normalize(username))
        if not user:
            raise NotFoundError("User", username)
        return self.mapper.to_response(user)

    async def list_all(self) -> list[UserResponse]:
        return self.mapper.to_response_list(await self.repository.list_all())

    async def list_active(self) -> list[UserResponse]:
        return self.mapper.to_response_list(await self.repository.list_active())

    async def update_user(self, user_id: int, request: UpdateUserRequest) -> UserResponse:
        logger.info("Updating user with id: {}", user_id)
        user = await self._get_or_raise(user_id)

        if request.username:
            validate_username(request.username)
            username = normalize(request.username)
            if username != user.username and await self.repository.exists_by_username(
                username
            ):
                logger.warning("Username already taken: {}", username)
                raise AlreadyExistsError("username", username)
            user.username = username

        if request.email:
            validate_email(request.email)
            email = normalize(request.email)
            if email != user.email and await self.repository.exists_by_email(email):
                logger.warning("Email already registered: {}", email)
                raise AlreadyExistsError("email", email)
            user.email = email

        if request.password:
            validate_password(request.password)
            user.password_hash = self.hasher.hash(request.password)

        user.updated_at = _utcnow()
        updated = await self.repository.update(user)
        logger.info("User updated with id: {}", updated.id)
        return self.mapper.to_response(updated)

    async def deactivate_user(self, user_id: int) -> None:
        logger.info("Deactivating user with id: {}", user_id)
        user = await self._get_or_raise(user_id)
        user.is_active = False
        user.updated_at = _utcnow()
        await self.repository.update(user)

    async def delete_user(self, user_id: int) -> None:
        logger.info("Deleting user with id: {}", user_id)
        await self._get_or_raise(user_id)
        await self.repository.delete(user_id)

    async def search_by_username(self, fragment: str) -> list[UserResponse]:
        logger.debug("Searching users with username containing: {}", fragment)
        users = await self.repository.search_by_username(normalize(fragment))
        return self.mapper.to_response_list(users)

    async def list_by_email_domain(self, domain: str) -> list[UserResponse]:
        users = await self.repository.list_by_email_domain(normalize(domain))
        return self.mapper.to_response_list(users)

    async def exists_by_username(self, username: str) -> bool:
        return await self.repository.exists_by_username(normalize(username))

    async def exists_by_email(self, email: str) -> bool:
        return await self.repository.exists_by_email(normalize(email))

    async def _get_or_raise(self, user_id: int) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
