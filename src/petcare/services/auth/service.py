"""Remote session operations that drive the token gate."""

from __future__ import annotations

import logging

from ...config import settings
from ...schemas.auth import GoogleLoginRequest, LoginResponse, ProfileResponse
from ..remote.client import ApiClient
from ..remote.classifier import EMPTY_BODY
from ..remote.result import Error, ErrorKind, Result, Success

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    @property
    def gate(self):
        return self.client.gate

    def login_with_google(self, id_token: str) -> Result[LoginResponse]:
        """Exchange a Google ID token for a session token and start the session on success."""

        payload = GoogleLoginRequest(id_token=id_token).model_dump(by_alias=True)
        result = self.client.post(settings.google_login_path, json=payload, decode=LoginResponse.model_validate)
        match result:
            case Success(value=login):
                self.gate.login(login.token)
            case Error(kind=kind, http_status=status):
                logger.warning(f"Google login failed ({kind.value}, status={status})")
        return result

    def logout(self) -> Result[None]:
        """Close the session remotely; the local token is dropped only on success."""

        result = self.client.post(settings.logout_path, decode=lambda payload: None)
        match result:
            case Success():
                self.gate.logout()
            case Error(kind=ErrorKind.UNKNOWN, message=message, http_status=None) if message == EMPTY_BODY:
                # 204 No Content
                self.gate.logout()
                return Success(None)
        return result

    def fetch_profile(self) -> Result[ProfileResponse]:
        return self.client.get(settings.profile_path, decode=ProfileResponse.model_validate)
