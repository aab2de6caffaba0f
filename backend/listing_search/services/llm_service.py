"""
LLM service for interacting with OpenAI chat and embedding models.
"""

import logging
from typing import Optional, List
from functools import lru_cache

from openai import AsyncOpenAI

from ..config import Settings, get_settings
from ..exceptions import InvalidInputError, UpstreamError
from ..models.state import Language, LANGUAGE_NAMES
from ..prompts import SUMMARIZE_PROMPT, TRANSLATE_PROMPT

logger = logging.getLogger(__name__)


class LLMService:
    """
    Service for interacting with Large Language Models (OpenAI GPT).
    """

    def __init__(self, client: Optional[AsyncOpenAI] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = client or get_openai_client()
        logger.info(f"Initialized OpenAI LLM client with model: {self.settings.OPENAI_MODEL}")

    @property
    def client(self) -> AsyncOpenAI:
        return self._client

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        model: Optional[str] = None
    ) -> str:
        """
        Generate a response from the LLM.

        Args:
            prompt: The user prompt/query
            system_prompt: Optional system prompt
            temperature: Sampling temperature (uses settings default if not provided)
            model: Model to use (uses settings default if not provided)

        Returns:
            Generated text response, empty when the model returned nothing
        """
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        response = await self._client.chat.completions.create(
            model=model or self.settings.OPENAI_MODEL,
            messages=messages,
            temperature=self.settings.OPENAI_TEMPERATURE if temperature is None else temperature,
        )

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def embed(self, text: str) -> List[float]:
        """
        Get the embedding vector for a text.

        Raises:
            InvalidInputError: text is empty or not a string
            UpstreamError: the response carries no vector
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text to embed must be a non-empty string.")

        response = await self._client.embeddings.create(
            model=self.settings.OPENAI_EMBEDDING_MODEL,
            input=text,
        )

        if not response.data or not response.data[0].embedding:
            raise UpstreamError("The embedding model returned no vector.")
        return list(response.data[0].embedding)

    async def localize(self, text: Optional[str], language: Language, mode: Optional[str] = None) -> str:
        """
        Summarize and/or translate a text into the user's language.

        Args:
            text: Source text; empty text short-circuits to ""
            language: Target language
            mode: "summarize" (at most 4 sentences, translated) or
                "translate" (translation only); defaults to LOCALIZATION_MODE

        Returns:
            Trimmed model output, or "" when the model returned nothing
        """
        if not text or not text.strip():
            return ""

        mode = mode or self.settings.LOCALIZATION_MODE
        template = TRANSLATE_PROMPT if mode == "translate" else SUMMARIZE_PROMPT
        prompt = template.format(language=LANGUAGE_NAMES[language], text=text)

        response = await self.generate(prompt=prompt, temperature=0)
        return response.strip()


@lru_cache()
def get_openai_client() -> AsyncOpenAI:
    """Shared async OpenAI client built from settings."""
    return AsyncOpenAI(api_key=get_settings().OPENAI_API_KEY)


# Singleton instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """
    Get or create the LLM service singleton.

    Returns:
        LLMService instance
    """
    global _llm_service

    if _llm_service is None:
        _llm_service = LLMService()

    return _llm_service
