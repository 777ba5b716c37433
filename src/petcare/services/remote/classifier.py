"""Classification of HTTP responses and transport failures into ``Result`` values."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from .result import Error, ErrorKind, Result, Success

logger = logging.getLogger(__name__)

EMPTY_BODY = "empty body"

Decoder = Callable[[Any], Any]


def _status_kind(status_code: int) -> ErrorKind:
    if 400 <= status_code <= 499:
        return ErrorKind.CLIENT_ERROR
    if 500 <= status_code <= 599:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.UNKNOWN


def classify_response(response: httpx.Response, decode: Optional[Decoder] = None) -> Result[Any]:
    """Map a received response to ``Success`` or ``Error``.

    ``decode`` turns the parsed JSON body into the caller's type (for example a
    pydantic ``model_validate``). A failure while decoding is reported as UNKNOWN.
    """

    if not response.is_success:
        kind = _status_kind(response.status_code)
        logger.warning(f"Remote call failed with HTTP {response.status_code} ({kind.value})")
        return Error(kind, response.text or None, http_status=response.status_code)

    if not response.content:
        return Error(ErrorKind.UNKNOWN, EMPTY_BODY)
    try:
        payload = response.json()
    except ValueError:
        return Error(ErrorKind.UNKNOWN, EMPTY_BODY)
    if payload is None:
        return Error(ErrorKind.UNKNOWN, EMPTY_BODY)

    if decode is None:
        return Success(payload)
    try:
        return Success(decode(payload))
    except Exception as exc:
        logger.warning(f"Could not decode response body: {exc}")
        return Error(ErrorKind.UNKNOWN, str(exc), cause=exc)


def classify_exception(exc: BaseException) -> Error:
    """Map an exception raised while performing a call."""

    if isinstance(exc, (httpx.TransportError, OSError)):
        logger.warning(f"Transport failure: {exc!r}")
        return Error(ErrorKind.TRANSPORT, str(exc) or type(exc).__name__, cause=exc)
    logger.error(f"Unexpected failure during remote call: {exc!r}")
    return Error(ErrorKind.UNKNOWN, str(exc) or type(exc).__name__, cause=exc)


def execute(call: Callable[[], httpx.Response], decode: Optional[Decoder] = None) -> Result[Any]:
    """Run ``call`` and classify whatever it produces. Never raises."""

    try:
        response = call()
    except Exception as exc:
        return classify_exception(exc)
    try:
        return classify_response(response, decode)
    except Exception as exc:
        return classify_exception(exc)


async def execute_async(
    call: Callable[[], Awaitable[httpx.Response]],
    decode: Optional[Decoder] = None,
) -> Result[Any]:
    """Async variant of ``execute``; cancellation yields a TRANSPORT error."""

    try:
        response = await call()
    except asyncio.CancelledError as exc:
        logger.info("Remote call cancelled")
        return Error(ErrorKind.TRANSPORT, "cancelled", cause=exc)
    except Exception as exc:
        return classify_exception(exc)
    try:
        return classify_response(response, decode)
    except Exception as exc:
        return classify_exception(exc)
