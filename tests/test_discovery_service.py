import httpx
import pytest

from src.petcare.models.domain import Coordinate
from src.petcare.schemas.discovery import SearchFilter
from src.petcare.services.auth.gate import AuthTokenGate
from src.petcare.services.discovery.service import DiscoveryService
from src.petcare.services.remote.client import ApiClient
from src.petcare.services.remote.result import Error, ErrorKind, Success

ORIGIN = Coordinate(-33.4489, -70.6693)


def _provider(vid: str, lat: float, lon: float, open_now: bool = True, offers=None) -> dict:
    return {
        "vetId": vid,
        "nombre": f"Vet {vid}",
        "lat": lat,
        "lon": lon,
        "openNow": open_now,
        "ofertas": offers
        if offers is not None
        else [{"id": f"{vid}-o1", "procedimientoId": "VACUNA", "nombre": "Vacuna", "precioCents": 1500000, "conStock": True}],
    }


PAYLOAD = {
    "items": [
        _provider("far", -33.40, -70.60),
        _provider("near", -33.4490, -70.6690),
        _provider("closed", -33.4495, -70.6695, open_now=False),
    ]
}


@pytest.fixture
def captured() -> list:
    return []


def _service(captured: list, response: httpx.Response) -> DiscoveryService:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return response

    client = ApiClient(AuthTokenGate(), base_url="https://api.test", transport=httpx.MockTransport(handler))
    return DiscoveryService(client)


def test_search_providers_ranks_payload(captured):
    service = _service(captured, httpx.Response(200, json=PAYLOAD))

    result = service.search_providers(ORIGIN, SearchFilter(open_now_only=True, radius_km=25))

    assert isinstance(result, Success)
    assert [item.provider_id for item in result.value] == ["near", "far"]
    assert result.value[0].cheapest_offer.price == 1500000

    params = captured[0].url.params
    assert captured[0].url.path == "/api/descubrimiento/veterinarios"
    assert float(params["lat"]) == pytest.approx(ORIGIN.latitude)
    assert float(params["lng"]) == pytest.approx(ORIGIN.longitude)
    assert float(params["radioKm"]) == 25
    assert "limit" not in params


def test_search_providers_uses_default_filter(captured):
    service = _service(captured, httpx.Response(200, json=PAYLOAD))

    result = service.search_providers(ORIGIN)

    assert [item.provider_id for item in result.value] == ["near", "closed", "far"]


def test_invalid_payload_is_unknown_error(captured):
    broken = {"items": [_provider("bad", 123.0, 0.0)]}
    service = _service(captured, httpx.Response(200, json=broken))

    result = service.search_providers(ORIGIN)

    assert isinstance(result, Error)
    assert result.kind is ErrorKind.UNKNOWN


def test_server_error_is_passed_through(captured):
    service = _service(captured, httpx.Response(503, text="unavailable"))

    result = service.search_providers(ORIGIN)

    assert result == Error(ErrorKind.SERVER_ERROR, "unavailable", http_status=503)


def test_connection_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ApiClient(AuthTokenGate(), base_url="https://api.test", transport=httpx.MockTransport(handler))

    result = DiscoveryService(client).search_providers(ORIGIN)

    assert result.kind is ErrorKind.TRANSPORT


def test_offers_without_stock_flag_do_not_count_as_stocked(captured):
    unknown_stock = [{"id": "o1", "procedimientoId": "VACUNA", "nombre": "Vacuna", "precioCents": 900000}]
    payload = {"items": [_provider("unknown", -33.4490, -70.6690, offers=unknown_stock), _provider("stocked", -33.45, -70.67)]}
    service = _service(captured, httpx.Response(200, json=payload))

    result = service.search_providers(ORIGIN, SearchFilter(require_stock=True))

    assert [item.provider_id for item in result.value] == ["stocked"]
