"""Discovery request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Coordinate, Offer, ProviderCandidate


class SearchFilter(BaseModel):
    procedure_id: Optional[str] = Field(default=None, description="Restrict to offers of this procedure.")
    open_now_only: bool = False
    require_stock: bool = False
    limit: int = Field(default=50, gt=0)
    offset: int = Field(default=0, ge=0)
    radius_km: Optional[float] = Field(default=None, gt=0)


class OfferPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    offer_id: str = Field(..., alias="id")
    procedure_id: str = Field(..., alias="procedimientoId")
    name: str = Field(..., alias="nombre")
    price: int = Field(..., alias="precioCents", ge=0)
    has_stock: bool = Field(default=False, alias="conStock")

    def to_domain(self) -> Offer:
        return Offer(
            offer_id=self.offer_id,
            procedure_id=self.procedure_id,
            name=self.name,
            price=self.price,
            has_stock=self.has_stock,
        )


class ProviderPayload(BaseModel):
    """Single provider as returned by the discovery endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    provider_id: str = Field(..., alias="vetId")
    name: str = Field(..., alias="nombre")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    open_now: bool = Field(default=False, alias="openNow")
    offers: List[OfferPayload] = Field(default_factory=list, alias="ofertas")

    def to_domain(self) -> ProviderCandidate:
        return ProviderCandidate(
            provider_id=self.provider_id,
            name=self.name,
            location=Coordinate(self.lat, self.lon),
            open_now=self.open_now,
            offers=tuple(offer.to_domain() for offer in self.offers),
        )


class ProviderSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: List[ProviderPayload] = Field(default_factory=list)

    def candidates(self) -> list[ProviderCandidate]:
        return [item.to_domain() for item in self.items]
