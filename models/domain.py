"""Domain models for core chat entities."""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from langchain_core.messages import HumanMessage
from pydantic import BaseModel, Field, root_validator, validator

from utils.media_utils import image_content_part, parse_data_uri, text_content_part, to_data_uri


class SessionState(str, Enum):
    """States of the chat session driver."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class Attachment(BaseModel):
    """Inline image sent alongside a query."""

    mime_type: str = Field(..., description="Image MIME type, e.g. image/png")
    data: str = Field(..., description="Base64-encoded image payload")

    @root_validator(skip_on_failure=True)
    def validate_payload(cls, values):
        """Re-use the data URI parser so every attachment obeys the same rules."""
        mime_type, data = parse_data_uri(to_data_uri(values["mime_type"], values["data"]))
        values["mime_type"] = mime_type
        values["data"] = data
        return values

    @classmethod
    def from_data_uri(cls, data_uri: str) -> "Attachment":
        mime_type, data = parse_data_uri(data_uri)
        return cls(mime_type=mime_type, data=data)

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.mime_type, self.data)

    class Config:
        frozen = True


class Message(BaseModel):
    """One entry of the chat log."""

    id: str = Field(..., description="Time-based identifier, unique within the session")
    role: Literal["user", "assistant"] = Field(..., description="Role of the message sender")
    content: str = Field(default="", description="Message text")
    image: Optional[str] = Field(default=None, description="Attached image as a data URI")

    @validator("image")
    def validate_image(cls, v):
        """Stored images must still be valid data URIs."""
        if v is None:
            return v
        parse_data_uri(v)
        return v

    @root_validator(skip_on_failure=True)
    def content_or_image(cls, values):
        """User messages need text or an image; replies may be empty."""
        if values.get("role") != "user":
            return values
        if not (values.get("content") or "").strip() and not values.get("image"):
            raise ValueError("User message must have content or an image")
        return values

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "1760781600000",
                "role": "user",
                "content": "Can you share a source for this claim?",
                "image": None,
            }
        }


class NoToolCall(BaseModel):
    """The model answered without asking for a tool."""

    kind: Literal["none"] = "none"


class ToolCall(BaseModel):
    """The model asked for a tool to be run."""

    kind: Literal["call"] = "call"
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None


ToolDecision = Union[NoToolCall, ToolCall]


class GenerationRequest(BaseModel):
    """A single prompt sent to the model; built fresh per call."""

    prompt: str
    attachment: Optional[Attachment] = None
    tools: Tuple[Any, ...] = ()

    def to_messages(self) -> List[HumanMessage]:
        """Render the request as ordered content parts: text, then media."""
        if self.attachment is None:
            return [HumanMessage(content=self.prompt)]
        return [
            HumanMessage(
                content=[
                    text_content_part(self.prompt),
                    image_content_part(self.attachment.data_uri),
                ]
            )
        ]

    class Config:
        frozen = True
        arbitrary_types_allowed = True


class GenerationResult(BaseModel):
    """Model output: response text plus the first tool call, if any."""

    text: str = ""
    tool_decision: ToolDecision = Field(default_factory=NoToolCall)


class Notice(BaseModel):
    """User-visible, non-fatal notification."""

    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = "default"
