# userhub/core/entities.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """
    Account entity shared by the service and repository layers.
    The password holds a hash once the user has been saved.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    username: str
    password: str
    name: str = ""
    email: str = ""
    avatar: str = ""
    role: Role = Role.USER
    created_at: datetime | None = None
    updated_at: datetime | None = None
