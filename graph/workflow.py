"""LangGraph workflow for the tool-driven augmentation flow."""
import logging
from typing import Optional, TypedDict

from langgraph.graph import StateGraph, END

from agents.generation import generate
from agents.prompts import AUGMENTED_PREAMBLE, build_prompt
from agents.tools import SHOULD_INCLUDE_DATA, should_include_data
from models.domain import GenerationRequest, ToolCall, ToolDecision

logger = logging.getLogger("chatbot.flows.augment")


class AugmentationState(TypedDict):
    """State definition for the augmentation workflow."""
    query: str
    first_response: str
    tool_decision: Optional[ToolDecision]
    include_data: bool
    final_response: Optional[str]


class AugmentationWorkflow:
    """Two-call augmentation: the model decides whether to ask for the tool.

    generate -> (tool requested?) run_tool -> (predicate true?) augmented_generate
    """

    def __init__(self, llm):
        self.llm = llm
        self.app = self._build_workflow()

    def generate_node(self, state: AugmentationState):
        """First call, with shouldIncludeData offered to the model."""
        request = GenerationRequest(
            prompt=build_prompt(state["query"]),
            tools=(should_include_data,),
        )
        result = generate(self.llm, request)
        return {"first_response": result.text, "tool_decision": result.tool_decision}

    def run_tool_node(self, state: AugmentationState):
        """Run the predicate locally on the original query, not the model's arguments."""
        include = bool(should_include_data.invoke({"query": state["query"]}))
        logger.info("[Node: Tool] %s -> %s", SHOULD_INCLUDE_DATA, include)
        return {"include_data": include}

    def augmented_generate_node(self, state: AugmentationState):
        """Second call asking the model to support its answer with links or documents."""
        logger.info("[Node: Augment] Issuing augmented generation")
        request = GenerationRequest(prompt=build_prompt(state["query"], AUGMENTED_PREAMBLE))
        result = generate(self.llm, request)
        return {"final_response": result.text}

    def _route_after_generate(self, state: AugmentationState) -> str:
        decision = state.get("tool_decision")
        if isinstance(decision, ToolCall) and decision.name == SHOULD_INCLUDE_DATA:
            return "run_tool"
        if isinstance(decision, ToolCall):
            logger.warning("[Node: Generate] Ignoring unknown tool call %r", decision.name)
        else:
            logger.info("[Node: Generate] No tool call; returning first response")
        return "end"

    def _route_after_tool(self, state: AugmentationState) -> str:
        return "augment" if state.get("include_data") else "end"

    def _build_workflow(self):
        """Build the LangGraph workflow."""
        builder = StateGraph(AugmentationState)
        builder.add_node("generate", self.generate_node)
        builder.add_node("run_tool", self.run_tool_node)
        builder.add_node("augmented_generate", self.augmented_generate_node)

        builder.set_entry_point("generate")
        builder.add_conditional_edges(
            "generate",
            self._route_after_generate,
            {"run_tool": "run_tool", "end": END},
        )
        builder.add_conditional_edges(
            "run_tool",
            self._route_after_tool,
            {"augment": "augmented_generate", "end": END},
        )
        builder.add_edge("augmented_generate", END)

        return builder.compile()

    def run(self, query: str) -> AugmentationState:
        return self.app.invoke(
            {
                "query": query,
                "first_response": "",
                "tool_decision": None,
                "include_data": False,
                "final_response": None,
            }
        )
