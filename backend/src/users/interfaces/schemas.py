from datetime import datetime

from pydantic import BaseModel


class CreateUserBody(BaseModel):
    username: str
    email: str
    password: str


class UpdateUserBody(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class UserResponseSchema(BaseModel):
    id: int
    username: str
    email: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
