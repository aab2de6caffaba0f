"""
LangGraph state definitions and domain models for the search workflow.
"""

from typing import TypedDict, List, Optional, Union, Any
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Language(str, Enum):
    """Languages the intent classifier can detect."""

    DUTCH = "nl"
    ENGLISH = "en"
    GERMAN = "de"
    SPANISH = "es"
    FRENCH = "fr"
    ITALIAN = "it"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    NORWEGIAN = "no"


LANGUAGE_NAMES = {
    Language.DUTCH: "Dutch",
    Language.ENGLISH: "English",
    Language.GERMAN: "German",
    Language.SPANISH: "Spanish",
    Language.FRENCH: "French",
    Language.ITALIAN: "Italian",
    Language.PORTUGUESE: "Portuguese",
    Language.RUSSIAN: "Russian",
    Language.NORWEGIAN: "Norwegian",
}


class IntentType(str, Enum):
    """
    Enumeration of possible user intents.

    Values are the exact strings the classifier prompt asks the model for.
    """

    GENERAL_QUESTION = "algemene vraag"
    PROPERTY_SEARCH = "vastgoedzoekopdracht"


def _whole_number(value: Optional[Union[int, float]]) -> Optional[Union[int, float]]:
    # 400000.0 is sent as 400000
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class SearchFilters(BaseModel):
    """
    Structured filters extracted from the user's message.

    Field aliases are the keys the classifier returns in its JSON output.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    min_bedrooms: Optional[int] = Field(None, ge=0, alias="min_slaapkamers")
    min_bathrooms: Optional[int] = Field(None, ge=0, alias="min_badkamers")
    pool: Optional[bool] = Field(None, alias="zwembad")
    max_price: Optional[Union[int, float]] = Field(None, ge=0, alias="max_prijs")
    location: Optional[str] = Field(None, alias="locatie")

    def to_rpc_params(self) -> dict:
        """
        Match parameters for the listing store with permissive defaults.

        Unset bedroom/bathroom minimums become 1, an unset pool requirement
        becomes False and an unset max price stays null.
        """
        return {
            "max_price": _whole_number(self.max_price) or None,
            "min_baths": self.min_bathrooms or 1,
            "min_beds": self.min_bedrooms or 1,
            "pool_required": bool(self.pool),
        }


class IntentResult(BaseModel):
    """Parsed output of the intent classifier."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language: Language = Field(..., alias="taal")
    intent: IntentType = Field(..., alias="intentie")
    filters: SearchFilters = Field(default_factory=SearchFilters)

    @field_validator("filters", mode="before")
    @classmethod
    def _null_filters(cls, value):
        return {} if value is None else value

    @property
    def is_property_search(self) -> bool:
        return self.intent == IntentType.PROPERTY_SEARCH


class ListingRecord(BaseModel):
    """
    A listing row returned by the ``match_properties`` procedure.

    Read-only snapshot; unknown columns (similarity, per-language urls, ...)
    are kept as extras so ``url_for`` can find them.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    ref: Optional[str] = None
    description: Optional[str] = None
    features: Optional[Union[List[str], str]] = None
    town: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    beds: Optional[int] = None
    baths: Optional[int] = None
    pool: Optional[int] = None
    built: Optional[float] = None
    image_url: Optional[Union[List[str], str]] = None
    url_en: Optional[str] = None

    @field_validator("pool", mode="before")
    @classmethod
    def _pool_flag(cls, value):
        if isinstance(value, bool):
            return int(value)
        return value

    @field_validator("ref", mode="before")
    @classmethod
    def _ref_as_text(cls, value):
        return None if value is None else str(value)

    @property
    def has_pool(self) -> bool:
        return self.pool == 1

    @property
    def primary_image(self) -> Optional[str]:
        """First image when stored as an array, the value itself otherwise."""
        if isinstance(self.image_url, list):
            return self.image_url[0] if self.image_url else None
        return self.image_url

    @property
    def feature_list(self) -> List[str]:
        if not self.features:
            return []
        if isinstance(self.features, str):
            return [f.strip() for f in self.features.split(",") if f.strip()]
        return [str(f) for f in self.features]

    def url_for(self, language: Language) -> Optional[str]:
        """Listing link in the user's language, falling back to English."""
        extra = self.model_extra or {}
        return extra.get(f"url_{language.value}") or self.url_en


class LocalizedListing(BaseModel):
    """A listing paired with its description and features in the user's language."""

    listing: ListingRecord
    description: str = ""
    features: str = ""


class SearchState(TypedDict, total=False):
    """
    State object passed through the LangGraph search workflow.

    Owned by a single request and discarded once the response is built.
    """

    # Input
    prompt: str

    # Intent Classification
    intent: Optional[IntentResult]

    # Retrieval
    embedding: List[float]
    listings: List[ListingRecord]
    localized: List[LocalizedListing]

    # Output
    response: Any


def create_initial_state(prompt: str) -> SearchState:
    """Create an initial state object for a new query."""
    return SearchState(
        prompt=prompt,
        intent=None,
        embedding=[],
        listings=[],
        localized=[],
        response=None,
    )
