"""
Retrieval Agent - Embeds the user's message and fetches matching listings.
"""

import logging
from typing import Optional

from .base_agent import BaseAgent
from ..config import Settings
from ..models.state import SearchFilters, SearchState
from ..services.listing_store import ListingStore
from ..services.llm_service import LLMService

logger = logging.getLogger(__name__)


class RetrievalAgent(BaseAgent):
    """
    Semantic listing search: the message is embedded as a whole and the
    store applies the extracted filters.
    """

    def __init__(self, llm: LLMService, store: ListingStore, settings: Optional[Settings] = None):
        super().__init__("retrieval_agent", settings)
        self.llm = llm
        self.store = store

    async def embed(self, state: SearchState) -> SearchState:
        state["embedding"] = await self.llm.embed(state.get("prompt"))
        return state

    async def retrieve(self, state: SearchState) -> SearchState:
        intent = state.get("intent")
        filters = intent.filters if intent else SearchFilters()

        listings = await self.store.match_properties(state["embedding"], filters)
        state["listings"] = listings
        # The vector is only needed for this call
        state["embedding"] = []

        logger.info(f"Retrieved {len(listings)} listings")
        return state

    async def process(self, state: SearchState) -> SearchState:
        state = await self.embed(state)
        return await self.retrieve(state)
