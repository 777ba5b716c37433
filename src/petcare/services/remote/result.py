"""Typed outcome of remote operations.

Every remote call returns either ``Success`` or ``Error``; callers match on the
variant instead of handling transport exceptions or HTTP codes themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Error:
    kind: ErrorKind
    message: Optional[str] = None
    http_status: Optional[int] = None
    cause: Optional[BaseException] = None

    @property
    def is_unauthorized(self) -> bool:
        return self.kind is ErrorKind.CLIENT_ERROR and self.http_status == 401


Result = Union[Success[T], Error]


def is_success(result: Result[T]) -> bool:
    return isinstance(result, Success)


def unwrap_or(result: Result[T], default: T) -> T:
    match result:
        case Success(value=value):
            return value
        case Error():
            return default


def map_result(result: Result[T], func: Callable[[T], U]) -> Result[U]:
    """Apply ``func`` to a success value; errors pass through unchanged."""

    match result:
        case Success(value=value):
            return Success(func(value))
        case Error():
            return result
