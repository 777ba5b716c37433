"""Catalog schemas for medical services and pets."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.domain import Pet, PriceRule, ServiceDefinition
from ..services.pricing.resolver import overlapping_rules

logger = logging.getLogger(__name__)


class PriceRulePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    min_weight: Decimal = Field(..., alias="pesoMin", ge=0)
    max_weight: Decimal = Field(..., alias="pesoMax", ge=0)
    price: int = Field(..., alias="precio", ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PriceRulePayload":
        if self.min_weight > self.max_weight:
            raise ValueError("pesoMin must be <= pesoMax")
        return self


class ServicePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    service_id: str = Field(..., alias="id")
    name: str = Field(..., alias="nombre")
    base_price: int = Field(..., alias="precioBase", ge=0)
    duration_minutes: int = Field(..., alias="duracionMinutos", ge=0)
    rules: List[PriceRulePayload] = Field(default_factory=list, alias="reglas")
    stock: Optional[int] = None
    deposit: Optional[int] = Field(default=None, alias="precioAbono", ge=0)

    def to_domain(self) -> ServiceDefinition:
        rules = tuple(PriceRule(r.min_weight, r.max_weight, r.price) for r in self.rules)
        overlaps = overlapping_rules(rules)
        if overlaps:
            # Input order decides; flagged so the catalog owner can fix the bands.
            logger.warning(
                f"Service {self.service_id} has {len(overlaps)} overlapping price band(s); "
                f"first matching rule in input order will be used"
            )
        return ServiceDefinition(
            service_id=self.service_id,
            name=self.name,
            base_price=self.base_price,
            duration_minutes=self.duration_minutes,
            rules=rules,
            stock=self.stock,
            deposit=self.deposit,
        )


class PetPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pet_id: str = Field(..., alias="id")
    name: str = Field(..., alias="nombre")
    weight: Decimal = Field(..., alias="pesoActual", ge=0)

    def to_domain(self) -> Pet:
        return Pet(pet_id=self.pet_id, name=self.name, weight=self.weight)
