"""
Fallback Agent - Answers messages that are not a property search.
"""

import logging
from typing import Optional

from .base_agent import BaseAgent
from ..config import Settings
from ..models.schemas import AgentResponse
from ..models.state import SearchState
from ..services.assistant_service import AssistantService
from ..utils.formatting import no_answer_message

logger = logging.getLogger(__name__)


class FallbackAgent(BaseAgent):
    """Hands the message to the hosted assistant."""

    def __init__(self, assistant: AssistantService, settings: Optional[Settings] = None):
        super().__init__("fallback_agent", settings)
        self.assistant = assistant

    async def process(self, state: SearchState) -> SearchState:
        intent = state.get("intent")
        reply = await self.assistant.ask(state.get("prompt"))

        if not reply:
            logger.warning("Assistant returned no message, using placeholder")
            reply = no_answer_message(intent.language if intent else None)

        state["response"] = AgentResponse(message=reply)
        return state
