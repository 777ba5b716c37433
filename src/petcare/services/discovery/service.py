"""Nearby provider search backed by the discovery endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ...config import settings
from ...models.domain import Coordinate, RankedProvider
from ...schemas.discovery import ProviderSearchResponse, SearchFilter
from ..remote.client import ApiClient
from ..remote.result import Error, Result, Success
from .ranker import rank

logger = logging.getLogger(__name__)


def build_search_params(origin: Coordinate, search_filter: SearchFilter) -> Dict[str, Any]:
    """Query parameters for the raw search. Paging and filtering stay client-side."""

    params: Dict[str, Any] = {"lat": origin.latitude, "lng": origin.longitude}
    if search_filter.radius_km is not None:
        params["radioKm"] = search_filter.radius_km
    return params


class DiscoveryService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def search_providers(
        self,
        origin: Coordinate,
        search_filter: SearchFilter | None = None,
    ) -> Result[List[RankedProvider]]:
        search_filter = search_filter or SearchFilter(limit=settings.default_page_size)
        result = self.client.get(
            settings.providers_search_path,
            params=build_search_params(origin, search_filter),
            decode=ProviderSearchResponse.model_validate,
        )
        match result:
            case Success(value=response):
                candidates = response.candidates()
                ranked = rank(origin, candidates, search_filter)
                logger.info(f"Ranked {len(ranked)} of {len(candidates)} providers near {origin}")
                return Success(ranked)
            case Error():
                return result
