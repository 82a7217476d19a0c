"""Smart search service module"""
from .smart_search_service import SmartSearchService, rank_results

__all__ = [
    "SmartSearchService",
    "rank_results",
]
