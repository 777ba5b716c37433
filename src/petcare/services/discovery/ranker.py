"""Distance ranking and filtering of nearby providers."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from ...models.domain import Coordinate, ProviderCandidate, RankedProvider
from ...schemas.discovery import SearchFilter
from ..geospatial import distance_meters


def _apply_filter(candidate: ProviderCandidate, search_filter: SearchFilter) -> Optional[ProviderCandidate]:
    """Return the candidate (offers reduced when needed) or None when it is filtered out."""

    if search_filter.open_now_only and not candidate.open_now:
        return None

    if search_filter.procedure_id is not None:
        offers = tuple(o for o in candidate.offers if o.procedure_id == search_filter.procedure_id)
        if not offers:
            return None
        candidate = replace(candidate, offers=offers)

    if search_filter.require_stock and not any(offer.has_stock for offer in candidate.offers):
        return None

    return candidate


def rank(
    origin: Coordinate,
    candidates: Sequence[ProviderCandidate],
    search_filter: SearchFilter | None = None,
) -> List[RankedProvider]:
    """Filter candidates, sort them by (distance, id) and return the requested page.

    With ``procedure_id`` set, each surviving candidate only keeps the offers for
    that procedure, and ``require_stock`` is evaluated against those offers.
    """

    search_filter = search_filter or SearchFilter()
    radius_m = search_filter.radius_km * 1000 if search_filter.radius_km is not None else None

    ranked: list[RankedProvider] = []
    for candidate in candidates:
        kept = _apply_filter(candidate, search_filter)
        if kept is None:
            continue
        distance = distance_meters(origin, kept.location)
        if radius_m is not None and distance > radius_m:
            continue
        ranked.append(RankedProvider(candidate=kept, distance_meters=distance))

    ranked.sort(key=lambda item: (item.distance_meters, item.provider_id))
    start = search_filter.offset
    return ranked[start : start + search_filter.limit]
