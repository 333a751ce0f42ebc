"""Multimodal flow: text plus an optional inline image, one model call."""
import logging
from typing import Optional

from agents.generation import generate
from agents.prompts import build_prompt
from models.domain import Attachment, GenerationRequest, GenerationResult

logger = logging.getLogger("chatbot.flows.multimodal")


class MultimodalChatAgent:
    """Answers a query, optionally about an attached image."""

    supports_attachments = True

    def __init__(self, llm=None):
        if llm is None:
            from config.llm import get_llm
            llm = get_llm()
        self.llm = llm

    def chat(self, query: str, attachment: Optional[Attachment] = None) -> GenerationResult:
        request = GenerationRequest(prompt=build_prompt(query), attachment=attachment)
        logger.info("Multimodal request (image=%s)", attachment is not None)
        result = generate(self.llm, request)
        return GenerationResult(text=result.text)

    def respond(self, query: str, attachment: Optional[Attachment] = None) -> GenerationResult:
        return self.chat(query, attachment)
