from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    username: str
    email: str
    password_hash: str
    is_active: bool = True
    id: int | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)
