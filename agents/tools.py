"""Tools the model may ask to have run during generation."""
import re

from langchain_core.tools import tool
from pydantic import BaseModel, Field

from models.domain import NoToolCall, ToolCall, ToolDecision

SHOULD_INCLUDE_DATA = "shouldIncludeData"

# Placeholder policy: keyword match, not a semantic classifier.
INCLUDE_DATA_RE = re.compile(r"link|document|source", re.IGNORECASE)


class ShouldIncludeDataInput(BaseModel):
    query: str = Field(..., description="The user query.")


@tool(SHOULD_INCLUDE_DATA, args_schema=ShouldIncludeDataInput)
def should_include_data(query: str) -> bool:
    """Determine whether to include external data based on user query. For example, if the user asks for links, documents, or external information."""
    return bool(INCLUDE_DATA_RE.search(query or ""))


def extract_tool_decision(response) -> ToolDecision:
    """Return the first tool call of a model reply; later calls are ignored."""
    tool_calls = getattr(response, "tool_calls", None) or []
    if not tool_calls:
        return NoToolCall()
    first = tool_calls[0]
    return ToolCall(
        name=first.get("name") or "",
        args=first.get("args") or {},
        id=first.get("id"),
    )
