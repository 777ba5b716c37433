"""Nearby provider discovery."""

from .ranker import rank
from .service import DiscoveryService, build_search_params

__all__ = ["rank", "DiscoveryService", "build_search_params"]
