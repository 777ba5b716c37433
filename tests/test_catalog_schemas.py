import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.petcare.schemas.catalog import PetPayload, ServicePayload
from src.petcare.services.cart.aggregator import CartAggregator


def _service_payload(**overrides) -> dict:
    payload = {
        "id": "S1",
        "nombre": "Esterilizacion",
        "precioBase": 40000,
        "duracionMinutos": 90,
        "reglas": [
            {"pesoMin": 0, "pesoMax": 10, "precio": 45000},
            {"pesoMin": 10.01, "pesoMax": 30, "precio": 60000},
        ],
        "stock": None,
        "precioAbono": 10000,
    }
    payload.update(overrides)
    return payload


def test_service_payload_builds_priced_cart_item():
    service = ServicePayload.model_validate(_service_payload()).to_domain()
    pet = PetPayload.model_validate({"id": "P1", "nombre": "Luna", "pesoActual": "12.5"}).to_domain()
    cart = CartAggregator()

    item = cart.add_item(pet, service)

    assert pet.weight == Decimal("12.5")
    assert item.price == 60000
    assert cart.current_state().min_deposit == 10000
    assert cart.current_state().total_duration == 90


def test_overlapping_bands_are_logged(caplog):
    payload = _service_payload(
        reglas=[{"pesoMin": 0, "pesoMax": 15, "precio": 1}, {"pesoMin": 10, "pesoMax": 20, "precio": 2}]
    )

    with caplog.at_level(logging.WARNING):
        service = ServicePayload.model_validate(payload).to_domain()

    assert "overlapping price band" in caplog.text
    assert [rule.price for rule in service.rules] == [1, 2]


def test_inverted_band_is_rejected():
    with pytest.raises(ValidationError):
        ServicePayload.model_validate(_service_payload(reglas=[{"pesoMin": 20, "pesoMax": 10, "precio": 1}]))
