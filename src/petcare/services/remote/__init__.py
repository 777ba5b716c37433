"""Remote call plumbing and result types."""

from .classifier import classify_exception, classify_response, execute, execute_async
from .result import Error, ErrorKind, Result, Success, is_success, map_result, unwrap_or

__all__ = [
    "Error",
    "ErrorKind",
    "Result",
    "Success",
    "classify_exception",
    "classify_response",
    "execute",
    "execute_async",
    "is_success",
    "map_result",
    "unwrap_or",
]
