"""
Pydantic schemas for API request/response models.
"""

from typing import Any, Optional, List, Union, Literal, Annotated
from pydantic import BaseModel, ConfigDict, Field


class QueryRequest(BaseModel):
    """Request model for the search endpoint."""

    # Left unvalidated so an empty, missing or non-string prompt is answered
    # with an error response from the pipeline instead of a 422.
    prompt: Optional[Any] = Field(None, description="User's free-text message")

    class Config:
        json_schema_extra = {
            "example": {
                "prompt": "I want an apartment with 2 bedrooms in Alicante"
            }
        }


class PropertyItem(BaseModel):
    """One listing as a caption plus its primary image."""

    model_config = ConfigDict(populate_by_name=True)

    caption: str = Field(..., description="Multi-line listing caption")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Primary image URL")


class PropertiesResponse(BaseModel):
    """Response for a property search."""

    type: Literal["properties"] = "properties"
    items: List[PropertyItem] = Field(default_factory=list, description="Listings in retrieval order")
    text: str = Field("", description="All listings joined into a single message")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "properties",
                "items": [
                    {
                        "caption": "🏡 R1234\n📍 Alicante, Alicante, Spain\n💰 250000 EUR\n"
                                   "🛌 2 | 🛁 1 | 🏊 No\n✨ Bright apartment near the beach.\n"
                                   "🔗 https://example.com/R1234",
                        "imageUrl": "https://example.com/R1234.jpg",
                    }
                ],
                "text": "I found 1 property for you:\n...",
            }
        }


class AgentResponse(BaseModel):
    """Response from the conversational assistant."""

    type: Literal["agent"] = "agent"
    message: str


class ErrorResponse(BaseModel):
    """Response when the pipeline failed."""

    type: Literal["error"] = "error"
    message: str


SearchResponse = Annotated[
    Union[PropertiesResponse, AgentResponse, ErrorResponse],
    Field(discriminator="type"),
]


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    llm_configured: bool = Field(..., description="Whether an OpenAI API key is set")
    listing_store_configured: bool = Field(..., description="Whether the listing store is configured")
    assistant_configured: bool = Field(..., description="Whether a fallback assistant is configured")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "llm_configured": True,
                "listing_store_configured": True,
                "assistant_configured": True,
            }
        }
