# userhub/models/user.py

from sqlalchemy import Column, String, DateTime
from . import Base


# -------------------------------
# User Model
# -------------------------------

class UserRecord(Base):
    """
    Database model for application users.
    The password column only ever stores a hash written by the user service.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    avatar = Column(String, nullable=False, default="")
    role = Column(String, nullable=False, default="USER")
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
