"""
Services for the Listing Search Assistant.

- LLMService: Chat completions, embeddings and localization
- ListingStore: Vector search via the match_properties procedure
- AssistantService: Hosted assistant for general questions
"""

from .llm_service import LLMService, get_llm_service, get_openai_client
from .listing_store import ListingStore, get_listing_store, close_listing_store
from .assistant_service import AssistantService, get_assistant_service

__all__ = [
    "LLMService",
    "get_llm_service",
    "get_openai_client",
    "ListingStore",
    "get_listing_store",
    "close_listing_store",
    "AssistantService",
    "get_assistant_service",
]
