"""Request and response records passed across the service boundary.

``UserResponse`` has no password attribute, so nothing built from it can
leak a digest.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CreateUserRequest:
    username: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UpdateUserRequest:
    username: str | None = None
    email: str | None = None
    password: str | None = None


@dataclass(frozen=True, slots=True)
class UserResponse:
    id: int
    username: str
    email: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
