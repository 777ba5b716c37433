"""Authentication request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GoogleLoginRequest(BaseModel):
    id_token: str = Field(..., serialization_alias="idToken", min_length=1)


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: str = Field(..., min_length=1)
    expires_at: Optional[str] = Field(default=None, alias="expiresAt")


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="id")
    email: Optional[str] = None
    name: Optional[str] = Field(default=None, alias="nombre")
    roles: List[str] = Field(default_factory=list)
