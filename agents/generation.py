"""Model invocation: the single boundary between the flows and the chat model."""
from models.domain import GenerationRequest, GenerationResult
from agents.tools import extract_tool_decision


def message_text(message) -> str:
    """Plain text of a chat-model reply, joining text parts of list content."""
    content = getattr(message, "content", "")
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


def generate(llm, request: GenerationRequest) -> GenerationResult:
    """Send one request to the model and return its text and first tool call.

    Errors from the model propagate unchanged; there are no retries here.
    """
    model = llm.bind_tools(list(request.tools)) if request.tools else llm
    response = model.invoke(request.to_messages())
    return GenerationResult(
        text=message_text(response),
        tool_decision=extract_tool_decision(response),
    )
