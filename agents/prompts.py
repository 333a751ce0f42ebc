"""Prompt templates shared by the chat flows."""

SYSTEM_PREAMBLE = (
    "You are a helpful chatbot. Answer the user's query to the best of your ability."
)

AUGMENTED_PREAMBLE = (
    "You are a helpful chatbot. You have determined that including external data is "
    "necessary to provide a comprehensive answer. Please include relevant links or "
    "documents to support your response to the user's query."
)

INCLUDE_DATA_INSTRUCTION = (
    "Include relevant links or documents to support your response to the user's query."
)


def build_prompt(query: str, preamble: str = SYSTEM_PREAMBLE) -> str:
    """Preamble followed by the user's query."""
    return f"{preamble}\n\nUser Query: {query}"


def build_inline_prompt(query: str, include_data: bool) -> str:
    """Single-call prompt with the include-data instruction rendered conditionally."""
    preamble = SYSTEM_PREAMBLE
    if include_data:
        preamble = f"{preamble} {INCLUDE_DATA_INSTRUCTION}"
    return build_prompt(query, preamble)
