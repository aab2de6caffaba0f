"""
Listing store client - vector similarity search through the Supabase
``match_properties`` remote procedure.

The procedure ranks rows by similarity to the query embedding and applies
the price/bedroom/bathroom/pool filters on the database side; ordering is
taken as returned.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..exceptions import RetrievalError
from ..models.state import ListingRecord, SearchFilters

logger = logging.getLogger(__name__)

MATCH_PROCEDURE = "match_properties"


class ListingStore:
    """Client for the listing store's PostgREST RPC endpoint."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = client or httpx.AsyncClient(timeout=self.settings.SUPABASE_TIMEOUT)

    @property
    def rpc_url(self) -> str:
        return f"{self.settings.SUPABASE_URL.rstrip('/')}/rest/v1/rpc/{MATCH_PROCEDURE}"

    def _headers(self) -> dict:
        key = self.settings.SUPABASE_KEY
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    def is_configured(self) -> bool:
        return bool(self.settings.SUPABASE_URL and self.settings.SUPABASE_KEY)

    def build_params(self, embedding: List[float], filters: SearchFilters) -> dict:
        """Parameters for one ``match_properties`` call."""
        params = {
            "query_embedding": embedding,
            "match_count": self.settings.MATCH_COUNT,
            "match_threshold": self.settings.MATCH_THRESHOLD,
        }
        params.update(filters.to_rpc_params())
        return params

    async def match_properties(self, embedding: List[float], filters: SearchFilters) -> List[ListingRecord]:
        """
        Retrieve the listings most similar to the query embedding.

        Args:
            embedding: Query embedding vector
            filters: Filters extracted by the intent classifier

        Returns:
            At most MATCH_COUNT listings, in the store's ranking order

        Raises:
            RetrievalError: the store call failed; the upstream message is kept
        """
        params = self.build_params(embedding, filters)

        try:
            resp = await self._client.post(self.rpc_url, json=params, headers=self._headers())
        except httpx.HTTPError as exc:
            raise RetrievalError(f"Listing store unreachable: {exc}") from exc

        if resp.status_code >= 400:
            raise RetrievalError(self._error_message(resp))

        try:
            rows = resp.json()
        except ValueError as exc:
            raise RetrievalError("Listing store returned invalid JSON.") from exc

        if not isinstance(rows, list):
            raise RetrievalError(f"Listing store returned an unexpected payload: {type(rows).__name__}")

        try:
            listings = [ListingRecord.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise RetrievalError(f"Listing store returned malformed rows: {exc}") from exc

        logger.info(f"Listing store returned {len(listings)} matches")
        return listings[: self.settings.MATCH_COUNT]

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Extract PostgREST's error message, falling back to the status line."""
        try:
            body = resp.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Listing store returned status {resp.status_code}"

    async def aclose(self):
        await self._client.aclose()


# Singleton instance
_listing_store: Optional[ListingStore] = None


def get_listing_store() -> ListingStore:
    """Get or create the listing store singleton."""
    global _listing_store

    if _listing_store is None:
        _listing_store = ListingStore()

    return _listing_store


async def close_listing_store():
    """Close the singleton's HTTP client if one was created."""
    global _listing_store

    if _listing_store is not None:
        await _listing_store.aclose()
        _listing_store = None
