"""HTTP API over the chat session."""
