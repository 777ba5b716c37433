"""HTTP client for the marketplace backend returning classified results."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ...config import settings
from ..auth.gate import AuthTokenGate, GateAuth
from .classifier import Decoder, execute
from .result import Result

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(
        self,
        gate: AuthTokenGate,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.api_base_url
        if not self.base_url:
            raise ValueError("API base URL is not configured.")
        self.gate = gate
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=GateAuth(gate, base_path=httpx.URL(self.base_url).path),
            timeout=httpx.Timeout(self.timeout, connect=settings.connect_timeout_seconds),
            transport=transport,
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        decode: Optional[Decoder] = None,
    ) -> Result[Any]:
        """Perform a call and classify it. The gate sees every outcome."""

        logger.debug(f"{method} {path} params={dict(params or {})}")
        result = execute(lambda: self._client.request(method, path, params=params, json=json), decode)
        self.gate.observe(result, path)
        return result

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None, decode: Optional[Decoder] = None) -> Result[Any]:
        return self.request("GET", path, params=params, decode=decode)

    def post(self, path: str, *, json: Any = None, decode: Optional[Decoder] = None) -> Result[Any]:
        return self.request("POST", path, json=json, decode=decode)
