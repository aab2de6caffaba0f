"""
Data models for the Listing Search Assistant.
"""

from .schemas import (
    QueryRequest,
    PropertyItem,
    PropertiesResponse,
    AgentResponse,
    ErrorResponse,
    SearchResponse,
    HealthResponse,
)
from .state import (
    Language,
    IntentType,
    SearchFilters,
    IntentResult,
    ListingRecord,
    LocalizedListing,
    SearchState,
)

__all__ = [
    "QueryRequest",
    "PropertyItem",
    "PropertiesResponse",
    "AgentResponse",
    "ErrorResponse",
    "SearchResponse",
    "HealthResponse",
    "Language",
    "IntentType",
    "SearchFilters",
    "IntentResult",
    "ListingRecord",
    "LocalizedListing",
    "SearchState",
]
