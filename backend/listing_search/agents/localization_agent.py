"""
Localization Agent - Summarizes and translates listing texts into the
user's language.
"""

import asyncio
from typing import Optional

from .base_agent import BaseAgent
from ..config import Settings
from ..models.state import Language, ListingRecord, LocalizedListing, SearchState
from ..services.llm_service import LLMService


class LocalizationAgent(BaseAgent):
    """
    Localizes all retrieved listings concurrently.

    Results keep the retrieval order regardless of completion order.
    """

    def __init__(self, llm: LLMService, settings: Optional[Settings] = None):
        super().__init__("localization_agent", settings)
        self.llm = llm

    async def localize_listing(self, listing: ListingRecord, language: Language) -> LocalizedListing:
        """Localize one listing's description (per LOCALIZATION_MODE) and features."""
        features = ", ".join(listing.feature_list)
        description, features = await asyncio.gather(
            self.llm.localize(listing.description, language),
            # Features are a list of short labels, never summarized
            self.llm.localize(features, language, mode="translate"),
        )
        return LocalizedListing(listing=listing, description=description, features=features)

    async def process(self, state: SearchState) -> SearchState:
        language = state["intent"].language
        listings = state.get("listings", [])

        state["localized"] = list(await asyncio.gather(
            *(self.localize_listing(listing, language) for listing in listings)
        ))
        return state
