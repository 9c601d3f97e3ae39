# userhub/api/deps.py

from fastapi import HTTPException, Request, status
from loguru import logger

from userhub.config import Settings
from userhub.core.result import Err, ErrorKind, Result
from userhub.services.storage import StorageService
from userhub.services.users import UserService


STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage_service


def unwrap(result: Result):
    """
    Returns the Ok value, or raises the HTTPException matching the error kind.
    """
    if isinstance(result, Err):
        code = STATUS_BY_KIND[result.error.kind]
        logger.warning(f"Request failed with {code}: {result.error.message}")
        raise HTTPException(status_code=code, detail=result.error.message)
    return result.value
