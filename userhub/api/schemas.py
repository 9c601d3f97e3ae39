# userhub/api/schemas.py

from datetime import datetime
from pydantic import BaseModel, Field

from userhub.core.entities import Role, User


class Token(BaseModel):
    access_token: str
    token_type: str


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = ""
    email: str = ""
    avatar: str = ""


class UserUpdate(BaseModel):
    """
    Fields a user may change on their own profile. Omitted fields are kept.
    """
    username: str | None = Field(default=None, min_length=1)
    name: str | None = None
    email: str | None = None
    avatar: str | None = None


class UserResponse(BaseModel):
    id: str
    username: str
    name: str
    email: str
    avatar: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump(exclude={"password"}))
