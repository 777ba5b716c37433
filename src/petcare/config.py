"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PETCARE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Clinipets Client Core"
    api_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of the marketplace backend (e.g., https://api.clinipets.cl).",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    connect_timeout_seconds: float = Field(default=10.0, gt=0.0)
    default_page_size: int = Field(default=50, gt=0)
    public_path_prefixes: tuple[str, ...] = Field(
        default=("/api/auth/login", "/api/publico"),
        description="Paths that never carry the bearer token and never invalidate the session.",
    )
    data_root: Path = Field(default=Path("data"), description="Root directory for local client state.")
    token_file: str = Field(default="session.json", description="Session file name, relative to data_root.")

    # Remote endpoints
    providers_search_path: str = "/api/descubrimiento/veterinarios"
    google_login_path: str = "/api/auth/login/google"
    logout_path: str = "/api/auth/logout"
    profile_path: str = "/api/auth/me"

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("public_path_prefixes", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def token_path(self) -> Path:
        return self.data_root / self.token_file


settings = Settings()
