# userhub/repositories/users.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import AsyncIterator
from loguru import logger
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from userhub.core.entities import User
from userhub.core.security import get_password_hash, verify_password
from userhub.models.user import UserRecord


class UserRepository(ABC):
    """
    Persistence abstraction the user service delegates to.
    Lookups return None on absence; hashing is owned here.
    """

    @abstractmethod
    def find_all(self) -> AsyncIterator[User]:
        ...

    @abstractmethod
    async def find_by_id(self, id: str) -> User | None:
        ...

    @abstractmethod
    async def find_by_username(self, username: str) -> User | None:
        ...

    @abstractmethod
    async def check_username_and_password(self, username: str, password: str) -> User | None:
        ...

    @abstractmethod
    def hashed_password(self, password: str) -> str:
        ...

    @abstractmethod
    async def insert(self, entity: User) -> User:
        ...

    @abstractmethod
    async def update(self, entity: User) -> User | None:
        ...

    @abstractmethod
    async def delete(self, entity: User) -> bool:
        ...


def _to_entity(record: UserRecord) -> User:
    return User.model_validate(record)


class SQLUserRepository(UserRepository):
    """
    SQLAlchemy implementation. Every session runs on the worker thread pool.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def find_all(self) -> AsyncIterator[User]:
        users = await run_in_threadpool(self._select_all)
        for user in users:
            yield user

    async def find_by_id(self, id: str) -> User | None:
        return await run_in_threadpool(self._select_by_id, id)

    async def find_by_username(self, username: str) -> User | None:
        return await run_in_threadpool(self._select_by_username, username)

    async def check_username_and_password(self, username: str, password: str) -> User | None:
        user = await self.find_by_username(username)
        if not user or not await run_in_threadpool(verify_password, password, user.password):
            return None
        return user

    def hashed_password(self, password: str) -> str:
        return get_password_hash(password)

    async def insert(self, entity: User) -> User:
        return await run_in_threadpool(self._insert, entity)

    async def update(self, entity: User) -> User | None:
        return await run_in_threadpool(self._update, entity)

    async def delete(self, entity: User) -> bool:
        return await run_in_threadpool(self._delete, entity.id)

    # -------------------------------
    # Blocking session work
    # -------------------------------

    def _select_all(self) -> list[User]:
        with self._session_factory() as db:
            records = db.query(UserRecord).order_by(UserRecord.created_at).all()
            return [_to_entity(r) for r in records]

    def _select_by_id(self, id: str) -> User | None:
        with self._session_factory() as db:
            record = db.get(UserRecord, id)
            return _to_entity(record) if record else None

    def _select_by_username(self, username: str) -> User | None:
        with self._session_factory() as db:
            record = db.query(UserRecord).filter(UserRecord.username == username).first()
            return _to_entity(record) if record else None

    def _insert(self, entity: User) -> User:
        now = datetime.now()
        record = UserRecord(
            id=entity.id,
            username=entity.username,
            password=entity.password,
            name=entity.name,
            email=entity.email,
            avatar=entity.avatar,
            role=entity.role.value,
            created_at=now,
            updated_at=now,
        )
        with self._session_factory() as db:
            db.add(record)
            db.commit()
            db.refresh(record)
            logger.debug(f"Inserted user row {record.id}")
            return _to_entity(record)

    def _update(self, entity: User) -> User | None:
        with self._session_factory() as db:
            record = db.get(UserRecord, entity.id)
            if record is None:
                return None
            record.username = entity.username
            record.password = entity.password
            record.name = entity.name
            record.email = entity.email
            record.avatar = entity.avatar
            record.role = entity.role.value
            record.updated_at = datetime.now()
            db.commit()
            db.refresh(record)
            return _to_entity(record)

    def _delete(self, id: str) -> bool:
        with self._session_factory() as db:
            deleted = db.query(UserRecord).filter(UserRecord.id == id).delete()
            db.commit()
            return deleted > 0
