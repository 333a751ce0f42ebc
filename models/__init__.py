"""Data models for request/response validation and domain entities."""
from models.request import ChatRequest
from models.response import (
    ChatResponse,
    ErrorResponse,
    MessagesResponse,
    SuccessResponse,
)
from models.domain import (
    Attachment,
    GenerationRequest,
    GenerationResult,
    Message,
    Notice,
    NoToolCall,
    SessionState,
    ToolCall,
    ToolDecision,
)

__all__ = [
    # Requests
    "ChatRequest",
    # Responses
    "ChatResponse",
    "ErrorResponse",
    "MessagesResponse",
    "SuccessResponse",
    # Domain
    "Attachment",
    "GenerationRequest",
    "GenerationResult",
    "Message",
    "Notice",
    "NoToolCall",
    "SessionState",
    "ToolCall",
    "ToolDecision",
]
