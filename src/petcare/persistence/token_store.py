"""Persistence for the session bearer token."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from ..config import settings

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    def load(self) -> Optional[str]:
        ...

    def save(self, token: Optional[str]) -> None:
        ...


class InMemoryTokenStore:
    """Process-local store, mostly useful for tests and ephemeral sessions."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token

    def load(self) -> Optional[str]:
        return self.token

    def save(self, token: Optional[str]) -> None:
        self.token = token


class FileTokenStore:
    """JSON file under the data root holding the current token."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or settings.token_path).resolve()

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable session file {self.path}: {exc}")
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def save(self, token: Optional[str]) -> None:
        if token is None:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump({"token": token}, handle, ensure_ascii=False, indent=2)
