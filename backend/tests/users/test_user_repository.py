from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from shared.exceptions import AlreadyExistsError
from users.domain.entities import User


def _user(**overrides) -> User:
    now = datetime.now(timezone.utc)
    values = {
        "username": "alice",
        "email": "alice@example.com",
        "password_hash": "$2b$04$digest",
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return User(**values)


async def test_create_and_get(repo):
    created = await repo.create(_user())
    assert created.id is not None
    fetched = await repo.get_by_id(created.id)
    assert fetched.username == "alice"
    assert fetched.is_active is True


async def test_duplicate_username_raises_already_exists(repo):
    await repo.create(_user())
    with pytest.raises(AlreadyExistsError) as exc_info:
        await repo.create(_user(email="other@example.com"))
    assert exc_info.value.field == "username"


async def test_uniqueness_ignores_case(repo):
    await repo.create(_user())
    with pytest.raises(AlreadyExistsError) as exc_info:
        await repo.create(_user(username="ALICE", email="other@example.com"))
    assert exc_info.value.field == "username"

    with pytest.raises(AlreadyExistsError) as exc_info:
        await repo.create(_user(username="bob", email="Alice@Example.com"))
    assert exc_info.value.field == "email"


async def test_not_null_violation_propagates(repo):
    with pytest.raises(IntegrityError):
        await repo.create(_user(username=None))
    assert await repo.list_all() == []


async def test_update_not_null_violation_propagates(repo):
    created = await repo.create(_user())
    created.email = None
    with pytest.raises(IntegrityError):
        await repo.update(created)

    unchanged = await repo.get_by_id(created.id)
    assert unchanged.email == "alice@example.com"
