"""
Intent Agent - Detects language and intent and extracts search filters.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from .base_agent import BaseAgent
from ..config import Settings
from ..exceptions import InvalidInputError, ParseError
from ..models.state import IntentResult, SearchState
from ..prompts import INTENT_SYSTEM_PROMPT
from ..services.llm_service import LLMService

logger = logging.getLogger(__name__)


def parse_intent(raw: Optional[str]) -> IntentResult:
    """
    Parse the classifier output into an IntentResult.

    The JSON object is taken from the first ``{`` to the last ``}`` of the
    model output and validated against the IntentResult schema.

    Raises:
        ParseError: output is empty, holds no JSON object, or does not
            match the schema
    """
    if not raw or not raw.strip():
        raise ParseError("The intent classifier returned an empty response.")

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        raise ParseError("The intent classifier response contains no JSON object.")

    try:
        data = json.loads(raw[start:end + 1])
    except json.JSONDecodeError as exc:
        raise ParseError(f"The intent classifier returned invalid JSON: {exc.msg}") from exc

    try:
        return IntentResult.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ParseError(f"The intent classifier returned unexpected values for: {fields}") from exc


class IntentAgent(BaseAgent):
    """
    Classifies the user's message with a deterministic LLM call.
    """

    def __init__(self, llm: LLMService, settings: Optional[Settings] = None):
        super().__init__("intent_agent", settings)
        self.llm = llm

    async def classify(self, prompt: str) -> IntentResult:
        """
        Detect language, intent and filters for a user message.

        Raises:
            InvalidInputError: prompt is empty or not a string; no call is made
            ParseError: the model output could not be parsed
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInputError("Prompt must be a non-empty string.")

        response = await self.llm.generate(
            prompt=prompt,
            system_prompt=INTENT_SYSTEM_PROMPT,
            temperature=0,
        )
        return parse_intent(response)

    async def process(self, state: SearchState) -> SearchState:
        intent = await self.classify(state.get("prompt"))
        logger.info(
            f"Intent detected: {intent.intent.value} (language={intent.language.value}, "
            f"filters={intent.filters.model_dump(exclude_none=True)})"
        )
        state["intent"] = intent
        return state
