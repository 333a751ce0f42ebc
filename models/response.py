"""Response models for API endpoints."""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal

from models.domain import Message, Notice


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: Literal[False] = False
    error: str = Field(..., description="Error message")
    code: Optional[str] = Field(
        default=None,
        description="Error code for programmatic handling"
    )
    notices: List[Notice] = Field(
        default_factory=list,
        description="User-visible notices raised while handling the request"
    )

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "ok": False,
                "error": "There was a problem communicating with the AI. Please try again.",
                "code": "PROCESSING_ERROR",
                "notices": []
            }
        }


class ChatResponse(BaseModel):
    """Response model for /api/chat endpoint."""

    ok: Literal[True] = True
    reply: str = Field(..., description="Assistant response text")
    message: Message = Field(..., description="Assistant message appended to the log")
    notices: List[Notice] = Field(default_factory=list)

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "ok": True,
                "reply": "2 + 2 = 4.",
                "message": {
                    "id": "1760781600001",
                    "role": "assistant",
                    "content": "2 + 2 = 4.",
                    "image": None
                },
                "notices": []
            }
        }


class MessagesResponse(BaseModel):
    """Response model for the current message log."""

    ok: Literal[True] = True
    state: str = Field(..., description="Session state: idle or awaiting-response")
    messages: List[Message] = Field(
        default_factory=list,
        description="Messages in display order"
    )
    notices: List[Notice] = Field(default_factory=list)


class SuccessResponse(BaseModel):
    """Generic success response."""

    ok: Literal[True] = True
    message: Optional[str] = Field(
        default=None,
        description="Optional success message"
    )
    notices: List[Notice] = Field(default_factory=list)
