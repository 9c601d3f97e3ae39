# userhub/services/users.py

import uuid
from typing import AsyncIterator
from loguru import logger
from starlette.concurrency import run_in_threadpool

from userhub.core.entities import User
from userhub.core.result import Ok, Result, bad_request, not_found, unauthorized
from userhub.repositories.users import UserRepository


class UpdateTargetMissingError(RuntimeError):
    """
    The repository had no row for the id being updated.
    Callers are not expected to handle this; there is no agreed contract for it yet.
    """


class UserService:

    def __init__(self, repository: UserRepository):
        self.repository = repository
        logger.debug("Initializing user service")

    def find_all(self) -> AsyncIterator[User]:
        logger.debug("find_all: listing all users")
        return self.repository.find_all()

    async def find_by_id(self, id: str) -> Result[User]:
        logger.debug(f"find_by_id: looking up user with id: {id}")
        user = await self.repository.find_by_id(id)
        if user is None:
            return not_found(f"User not found with id: {id}")
        return Ok(user)

    async def find_by_username(self, username: str) -> Result[User]:
        logger.debug(f"find_by_username: looking up user with username: {username}")
        user = await self.repository.find_by_username(username)
        if user is None:
            return not_found(f"User not found with username: {username}")
        return Ok(user)

    def hashed_password(self, password: str) -> str:
        logger.debug("hashed_password: hashing password")
        return self.repository.hashed_password(password)

    async def check_username_and_password(self, username: str, password: str) -> Result[User]:
        logger.debug("check_username_and_password: checking credentials")
        user = await self.repository.check_username_and_password(username, password)
        if user is None:
            return unauthorized("Incorrect username or password")
        return Ok(user)

    async def save(self, entity: User) -> Result[User]:
        logger.debug(f"save: creating user {entity.username}")

        existing = await self.repository.find_by_username(entity.username)
        if existing is not None:
            return bad_request(f"A user already exists with username: {entity.username}")

        user = entity.model_copy(update={
            "id": str(uuid.uuid4()),
            "password": await run_in_threadpool(self.hashed_password, entity.password),
        })
        return Ok(await self.repository.insert(user))

    async def update(self, id: str, entity: User) -> Result[User]:
        logger.debug(f"update: updating user with id: {id}")

        existing = await self.repository.find_by_username(entity.username)
        if existing is not None and existing.id != id:
            return bad_request(f"A user already exists with username: {entity.username}")

        updated = await self.repository.update(entity.model_copy(update={"id": id}))
        if updated is None:
            raise UpdateTargetMissingError(f"No user row to update for id: {id}")
        return Ok(updated)

    async def delete(self, id: str) -> User | None:
        logger.debug(f"delete: deleting user with id: {id}")

        user = await self.repository.find_by_id(id)
        if user is not None:
            await self.repository.delete(user)
        return user
