"""Domain models for providers, catalog services and the cart."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple, Union

Weight = Union[float, Decimal]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True, slots=True)
class Offer:
    """A purchasable procedure at a provider. Prices are integer minor units."""

    offer_id: str
    procedure_id: str
    name: str
    price: int
    has_stock: bool


@dataclass(frozen=True, slots=True)
class ProviderCandidate:
    """Unranked provider entry as returned by a search query."""

    provider_id: str
    name: str
    location: Coordinate
    open_now: bool
    offers: Tuple[Offer, ...] = ()


@dataclass(frozen=True, slots=True)
class RankedProvider:
    candidate: ProviderCandidate
    distance_meters: int

    @property
    def provider_id(self) -> str:
        return self.candidate.provider_id

    @property
    def cheapest_offer(self) -> Optional[Offer]:
        if not self.candidate.offers:
            return None
        return min(self.candidate.offers, key=lambda offer: offer.price)


@dataclass(frozen=True, slots=True)
class PriceRule:
    """Weight band (inclusive on both ends) mapped to a fixed price."""

    min_weight: Weight
    max_weight: Weight
    price: int

    def matches(self, weight: Weight) -> bool:
        return self.min_weight <= weight <= self.max_weight


@dataclass(frozen=True, slots=True)
class ServiceDefinition:
    """A bookable medical service with optional size-tiered pricing."""

    service_id: str
    name: str
    base_price: int
    duration_minutes: int
    rules: Tuple[PriceRule, ...] = ()
    stock: Optional[int] = None
    deposit: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Pet:
    pet_id: str
    name: str
    weight: Weight


@dataclass(frozen=True, slots=True)
class CartItem:
    item_id: str
    pet: Pet
    service: ServiceDefinition
    price: int
    duration_minutes: int


@dataclass(frozen=True, slots=True)
class CartState:
    """Derived cart totals. Always rebuilt from the item collection."""

    items: Tuple[CartItem, ...] = field(default_factory=tuple)
    total_duration: int = 0
    total_price: int = 0
    min_deposit: int = 0
