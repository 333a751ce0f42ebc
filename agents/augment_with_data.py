"""Augmentation flow: decides per query whether to ask for supporting data."""
import logging

from agents.generation import generate
from agents.prompts import build_inline_prompt
from agents.tools import should_include_data
from graph.workflow import AugmentationWorkflow
from models.domain import GenerationRequest, GenerationResult

logger = logging.getLogger("chatbot.flows.augment")


class AugmentWithDataAgent:
    """Model-driven two-call augmentation.

    The first request offers the ``shouldIncludeData`` tool. Only when the
    model calls it and the predicate holds for the query is a second request
    issued with the augmented preamble; otherwise the first answer is
    returned unchanged.
    """

    supports_attachments = False

    def __init__(self, llm=None):
        if llm is None:
            from config.llm import get_llm
            llm = get_llm()
        self.llm = llm
        self.workflow = AugmentationWorkflow(llm)

    def augment(self, query: str) -> GenerationResult:
        result = self.workflow.run(query)
        final = result.get("final_response")
        if final is not None:
            return GenerationResult(text=final)
        return GenerationResult(text=result.get("first_response") or "")

    def respond(self, query: str, attachment=None) -> GenerationResult:
        return self.augment(query)


class InlineAugmentWithDataAgent:
    """Template-evaluated augmentation in a single call.

    The predicate always runs before rendering and the include-data
    instruction is embedded in the prompt, so results can differ from
    AugmentWithDataAgent for the same query.
    """

    supports_attachments = False

    def __init__(self, llm=None):
        if llm is None:
            from config.llm import get_llm
            llm = get_llm()
        self.llm = llm

    def augment(self, query: str) -> GenerationResult:
        include = bool(should_include_data.invoke({"query": query}))
        logger.info("Inline augmentation include_data=%s", include)
        request = GenerationRequest(prompt=build_inline_prompt(query, include))
        return GenerationResult(text=generate(self.llm, request).text)

    def respond(self, query: str, attachment=None) -> GenerationResult:
        return self.augment(query)
