# userhub/core/result.py

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union


T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"


@dataclass(frozen=True)
class ServiceError:
    """
    An expected failure returned to the caller instead of being raised.
    """
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ServiceError

    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def not_found(message: str) -> Err:
    return Err(ServiceError(ErrorKind.NOT_FOUND, message))


def unauthorized(message: str) -> Err:
    return Err(ServiceError(ErrorKind.UNAUTHORIZED, message))


def bad_request(message: str) -> Err:
    return Err(ServiceError(ErrorKind.BAD_REQUEST, message))
