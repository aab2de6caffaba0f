"""
LangGraph workflow definition for the listing search pipeline.
"""

import logging
from typing import Any, Optional

from langgraph.graph import StateGraph, END

from ..agents import FallbackAgent, IntentAgent, LocalizationAgent, RetrievalAgent
from ..config import Settings, get_settings
from ..exceptions import RetrievalError, SearchError
from ..models.schemas import ErrorResponse, PropertiesResponse
from ..models.state import SearchState, create_initial_state
from ..services import (
    AssistantService,
    ListingStore,
    LLMService,
    get_assistant_service,
    get_listing_store,
    get_llm_service,
)
from ..utils.formatting import format_items, format_text_block

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong while processing your request."


class SearchWorkflow:
    """
    Orchestrates the search pipeline.

    classify -> embed -> retrieve -> localize -> format for property
    searches, classify -> fallback for everything else. ``arun`` is the
    single failure boundary: every outcome is a response object.
    """

    def __init__(
        self,
        llm: LLMService,
        store: ListingStore,
        assistant: AssistantService,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.intent_agent = IntentAgent(llm, self.settings)
        self.retrieval_agent = RetrievalAgent(llm, store, self.settings)
        self.localization_agent = LocalizationAgent(llm, self.settings)
        self.fallback_agent = FallbackAgent(assistant, self.settings)

        self._graph = None
        self._compiled_app = None
        self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow graph."""
        self._graph = StateGraph(SearchState)

        self._graph.add_node("classify", self.intent_agent.process)
        self._graph.add_node("fallback", self.fallback_agent.process)
        self._graph.add_node("embed", self.retrieval_agent.embed)
        self._graph.add_node("retrieve", self.retrieval_agent.retrieve)
        self._graph.add_node("localize", self.localization_agent.process)
        self._graph.add_node("format", self._format_results)

        self._graph.set_entry_point("classify")

        self._graph.add_conditional_edges(
            "classify",
            self._route_by_intent,
            {
                "search": "embed",
                "fallback": "fallback",
            }
        )

        self._graph.add_edge("embed", "retrieve")
        self._graph.add_edge("retrieve", "localize")
        self._graph.add_edge("localize", "format")
        self._graph.add_edge("format", END)
        self._graph.add_edge("fallback", END)

        self._compiled_app = self._graph.compile()

    def _route_by_intent(self, state: SearchState) -> str:
        intent = state.get("intent")
        return "search" if intent is not None and intent.is_property_search else "fallback"

    async def _format_results(self, state: SearchState) -> SearchState:
        language = state["intent"].language
        localized = state.get("localized", [])

        state["response"] = PropertiesResponse(
            items=format_items(localized, language),
            text=format_text_block(localized, language),
        )
        return state

    async def arun(self, prompt: Optional[Any]):
        """
        Run the workflow for a user message.

        Args:
            prompt: The user's free-text message

        Returns:
            PropertiesResponse, AgentResponse or ErrorResponse
        """
        try:
            result = await self._compiled_app.ainvoke(create_initial_state(prompt))
        except RetrievalError as e:
            logger.error(f"Listing retrieval failed: {e.message}")
            return ErrorResponse(message=f"Failed to retrieve properties: {e.message}")
        except SearchError as e:
            logger.warning(f"{type(e).__name__}: {e.message}")
            return ErrorResponse(message=e.message)
        except Exception as e:
            logger.error(f"Error processing query: {e}", exc_info=True)
            return ErrorResponse(message=GENERIC_ERROR_MESSAGE)

        response = result.get("response")
        if response is None:
            logger.error("Workflow finished without a response")
            return ErrorResponse(message=GENERIC_ERROR_MESSAGE)
        return response

    def get_graph_visualization(self) -> str:
        """
        Get a text representation of the workflow graph.

        Returns:
            ASCII diagram of the graph
        """
        diagram = """
                              ┌──────────────┐
                              │   Classify   │
                              │   (Intent)   │
                              └──────┬───────┘
                      search         │         other
                 ┌───────────────────┴───────────────────┐
                 ▼                                       ▼
          ┌──────────────┐                       ┌──────────────┐
          │    Embed     │                       │   Fallback   │
          └──────┬───────┘                       │  Assistant   │
                 ▼                               └──────┬───────┘
          ┌──────────────┐                              │
          │   Retrieve   │                              │
          └──────┬───────┘                              │
                 ▼                                      │
          ┌──────────────┐                              │
          │   Localize   │  (per listing, concurrent)   │
          └──────┬───────┘                              │
                 ▼                                      │
          ┌──────────────┐                              │
          │    Format    │                              │
          └──────┬───────┘                              │
                 └──────────────────┬───────────────────┘
                                    ▼
                               ┌─────────┐
                               │   END   │
                               └─────────┘
        """
        return diagram


# Singleton workflow instance
_workflow: Optional[SearchWorkflow] = None


def create_workflow(
    llm: Optional[LLMService] = None,
    store: Optional[ListingStore] = None,
    assistant: Optional[AssistantService] = None,
    settings: Optional[Settings] = None
) -> SearchWorkflow:
    """
    Create a new workflow instance.

    Services that are not provided are taken from their singletons.

    Returns:
        SearchWorkflow instance
    """
    return SearchWorkflow(
        llm=llm or get_llm_service(),
        store=store or get_listing_store(),
        assistant=assistant or get_assistant_service(),
        settings=settings,
    )


def get_workflow() -> SearchWorkflow:
    """
    Get or create the singleton workflow instance.

    Returns:
        SearchWorkflow singleton
    """
    global _workflow

    if _workflow is None:
        _workflow = create_workflow()

    return _workflow
