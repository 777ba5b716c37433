"""Session token gate shared by every authenticated call."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generator, Optional, Sequence

import httpx

from ...config import settings
from ...persistence.token_store import InMemoryTokenStore, TokenStore
from ..remote.result import Error, ErrorKind, Result

logger = logging.getLogger(__name__)

SessionCallback = Callable[[], None]


class AuthTokenGate:
    """Owns the bearer token and its lifecycle.

    The token is either present or absent. ``login`` and ``logout`` switch it
    explicitly; an observed 401 on a non-public path clears it and fires the
    session-invalidated callback once per transition. Every transition is written
    to the token store. ``init`` and ``teardown`` bracket the process lifetime.
    """

    def __init__(
        self,
        store: TokenStore | None = None,
        on_session_invalidated: SessionCallback | None = None,
        on_forbidden: SessionCallback | None = None,
        public_path_prefixes: Sequence[str] | None = None,
    ) -> None:
        self.store = store or InMemoryTokenStore()
        self.on_session_invalidated = on_session_invalidated
        self.on_forbidden = on_forbidden
        prefixes = settings.public_path_prefixes if public_path_prefixes is None else public_path_prefixes
        self.public_path_prefixes = tuple(prefixes)
        self._lock = threading.Lock()
        self._token: Optional[str] = None

    def init(self) -> None:
        with self._lock:
            self._token = self.store.load()
            restored = self._token is not None
        logger.info(f"Session gate initialised ({'restored session' if restored else 'no session'})")

    def teardown(self) -> None:
        with self._lock:
            self.store.save(self._token)

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def login(self, token: str) -> None:
        if not token or not token.strip():
            raise ValueError("A non-empty token is required to start a session.")
        with self._lock:
            self._token = token
            self.store.save(token)
        logger.info("Session started")

    def logout(self) -> None:
        with self._lock:
            self._token = None
            self.store.save(None)
        logger.info("Session closed")

    def is_public(self, path: str | None) -> bool:
        return bool(path) and any(path.startswith(prefix) for prefix in self.public_path_prefixes)

    def authorization_headers(self, path: str | None = None) -> dict[str, str]:
        token = self.token
        if token is None or self.is_public(path):
            return {}
        return {"Authorization": f"Bearer {token}"}

    def decorate(self, request: httpx.Request, path: str | None = None) -> httpx.Request:
        """Add the bearer header. ``path`` is the API-relative path used for the public check."""

        request.headers.update(self.authorization_headers(request.url.path if path is None else path))
        return request

    def observe(self, result: Result, path: str | None = None) -> None:
        """Inspect a classified outcome for authorization failures."""

        if not isinstance(result, Error) or result.kind is not ErrorKind.CLIENT_ERROR:
            return
        if self.is_public(path):
            return

        if result.http_status == 403:
            self._fire(self.on_forbidden, "forbidden")
            return
        if not result.is_unauthorized:
            return

        with self._lock:
            if self._token is None:
                return
            self._token = None
            self.store.save(None)
        logger.warning(f"Session invalidated by HTTP 401 on {path or 'request'}")
        self._fire(self.on_session_invalidated, "session invalidated")

    def _fire(self, callback: SessionCallback | None, name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception(f"The {name} callback failed")


class GateAuth(httpx.Auth):
    """``httpx`` auth hook that decorates requests through an ``AuthTokenGate``."""

    def __init__(self, gate: AuthTokenGate, base_path: str = "") -> None:
        self.gate = gate
        self.base_path = base_path.rstrip("/")

    def relative_path(self, path: str) -> str:
        """Strip the base URL path so public prefixes match what callers pass to the client."""
        if self.base_path and path.startswith(self.base_path):
            return path[len(self.base_path) :] or "/"
        return path

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        yield self.gate.decorate(request, self.relative_path(request.url.path))
