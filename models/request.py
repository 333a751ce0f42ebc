"""Request models for API validation."""
from pydantic import BaseModel, Field, root_validator, validator
from typing import Optional


class ChatRequest(BaseModel):
    """Request model for /api/chat endpoint."""

    query: str = Field(
        default="",
        max_length=10000,
        description="User query text"
    )
    photo_data_uri: Optional[str] = Field(
        default=None,
        description=(
            "Optional photo as a data URI that must include a MIME type and use "
            "Base64 encoding: 'data:<mimetype>;base64,<encoded_data>'"
        )
    )

    @validator("query", pre=True)
    def coerce_query(cls, v):
        """Treat a missing query as empty text."""
        return v if v is not None else ""

    @validator("photo_data_uri")
    def blank_photo_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @root_validator(skip_on_failure=True)
    def query_or_photo(cls, values):
        """Reject requests with neither text nor an image."""
        if not (values.get("query") or "").strip() and not values.get("photo_data_uri"):
            raise ValueError("Query cannot be empty or only whitespace without an attachment")
        return values

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "query": "Can you share a source for this claim?",
                "photo_data_uri": None
            }
        }
