"""
Hosted assistant service - answers general questions through an OpenAI
assistant thread.
"""

import asyncio
import logging
from typing import Optional

from openai import AsyncOpenAI

from ..config import Settings, get_settings
from ..exceptions import AssistantTimeoutError, InvalidInputError, UpstreamError
from .llm_service import get_openai_client

logger = logging.getLogger(__name__)

# Run states after which polling cannot succeed
FAILED_RUN_STATUSES = {"failed", "cancelled", "expired", "incomplete", "requires_action"}


class AssistantService:
    """
    Posts a message to a fresh assistant thread and waits for the reply.

    Polling is bounded by ASSISTANT_MAX_POLLS status checks spaced
    ASSISTANT_POLL_INTERVAL seconds apart.
    """

    def __init__(self, client: Optional[AsyncOpenAI] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = client or get_openai_client()

    def is_configured(self) -> bool:
        return bool(self.settings.OPENAI_ASSISTANT_ID)

    async def ask(self, prompt: str) -> Optional[str]:
        """
        Ask the assistant a question.

        Args:
            prompt: The user's message

        Returns:
            Text of the first assistant message, or None if there is none

        Raises:
            InvalidInputError: prompt is empty or not a string
            UpstreamError: the run ended in a failed state
            AssistantTimeoutError: the run did not complete in time
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInputError("Prompt must be a non-empty string.")
        if not self.is_configured():
            raise UpstreamError("No assistant is configured to answer general questions.")

        threads = self._client.beta.threads

        thread = await threads.create()
        await threads.messages.create(thread.id, role="user", content=prompt)
        run = await threads.runs.create(
            thread_id=thread.id,
            assistant_id=self.settings.OPENAI_ASSISTANT_ID,
        )

        await self._wait_for_run(thread.id, run.id)

        messages = await threads.messages.list(thread.id)
        for message in messages.data:
            if message.role == "assistant":
                return self._message_text(message)
        return None

    async def _wait_for_run(self, thread_id: str, run_id: str):
        """Poll the run until it completes, fails, or the poll budget runs out."""
        threads = self._client.beta.threads

        for attempt in range(1, self.settings.ASSISTANT_MAX_POLLS + 1):
            run = await threads.runs.retrieve(run_id, thread_id=thread_id)
            logger.debug(f"Assistant run {run_id} status: {run.status} (poll {attempt})")

            if run.status == "completed":
                return
            if run.status in FAILED_RUN_STATUSES:
                logger.warning(f"Assistant run {run_id} ended with status {run.status}")
                raise UpstreamError(f"The assistant run ended with status '{run.status}'.")

            if attempt < self.settings.ASSISTANT_MAX_POLLS:
                await asyncio.sleep(self.settings.ASSISTANT_POLL_INTERVAL)

        raise AssistantTimeoutError(
            f"The assistant did not answer after {self.settings.ASSISTANT_MAX_POLLS} status checks."
        )

    @staticmethod
    def _message_text(message) -> Optional[str]:
        for block in message.content or []:
            text = getattr(block, "text", None)
            if text is not None and text.value:
                return text.value
        return None


# Singleton instance
_assistant_service: Optional[AssistantService] = None


def get_assistant_service() -> AssistantService:
    """Get or create the assistant service singleton."""
    global _assistant_service

    if _assistant_service is None:
        _assistant_service = AssistantService()

    return _assistant_service
