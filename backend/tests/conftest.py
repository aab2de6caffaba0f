"""Shared fixtures: settings, OpenAI client stubs and a mocked listing store."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from listing_search.config import Settings
from listing_search.services import AssistantService, ListingStore, LLMService
from listing_search.workflow import SearchWorkflow


ALICANTE_INTENT = {
    "taal": "en",
    "intentie": "vastgoedzoekopdracht",
    "filters": {
        "min_slaapkamers": 2,
        "min_badkamers": None,
        "zwembad": None,
        "max_prijs": None,
        "locatie": "Alicante",
    },
}

GENERAL_INTENT = {
    "taal": "nl",
    "intentie": "algemene vraag",
    "filters": {
        "min_slaapkamers": None,
        "min_badkamers": None,
        "zwembad": None,
        "max_prijs": None,
        "locatie": None,
    },
}


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def chat_handler(intent_payload, delays=None):
    """
    Fake ``chat.completions.create``.

    System-prompted calls are intent classifications and get the given
    payload; everything else is a localization request and echoes the text
    after the first ": " prefixed with "[localized]".
    """
    async def create(model, messages, temperature, **kwargs):
        if messages[0]["role"] == "system":
            if isinstance(intent_payload, str):
                return completion(intent_payload)
            return completion("Here is the result:\n" + json.dumps(intent_payload))

        text = messages[-1]["content"].split(": ", 1)[-1]
        for marker, delay in (delays or {}).items():
            if marker in text:
                await asyncio.sleep(delay)
        return completion(f"[localized] {text}")

    return create


def assistant_message(text):
    return SimpleNamespace(
        role="assistant",
        content=[SimpleNamespace(type="text", text=SimpleNamespace(value=text))],
    )


def make_openai_client(intent_payload=None, run_statuses=("in_progress", "completed"),
                       messages=None, delays=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        side_effect=chat_handler(intent_payload if intent_payload is not None else ALICANTE_INTENT, delays)
    )
    client.embeddings.create = AsyncMock(
        return_value=SimpleNamespace(data=[SimpleNamespace(embedding=[0.1, 0.2, 0.3])])
    )

    threads = client.beta.threads
    threads.create = AsyncMock(return_value=SimpleNamespace(id="thread_1"))
    threads.messages.create = AsyncMock(return_value=SimpleNamespace(id="msg_1"))
    threads.runs.create = AsyncMock(return_value=SimpleNamespace(id="run_1", status="queued"))
    threads.runs.retrieve = AsyncMock(
        side_effect=[SimpleNamespace(id="run_1", status=s) for s in run_statuses]
    )
    if messages is None:
        messages = [
            SimpleNamespace(role="user", content=[]),
            assistant_message("Wij zijn bereikbaar van 9 tot 17 uur."),
        ]
    threads.messages.list = AsyncMock(return_value=SimpleNamespace(data=messages))
    return client


class StoreRecorder:
    """MockTransport handler for the match_properties endpoint."""

    def __init__(self, rows=None, status_code=200, body=None, error=None):
        self.rows = rows if rows is not None else []
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests = []

    @property
    def last_params(self):
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        payload = self.body if self.body is not None else self.rows
        return httpx.Response(self.status_code, json=payload)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        OPENAI_ASSISTANT_ID="asst_test",
        ASSISTANT_POLL_INTERVAL=0,
        ASSISTANT_MAX_POLLS=5,
        SUPABASE_URL="https://db.example.supabase.co",
        SUPABASE_KEY="service-key",
        MATCH_COUNT=3,
        MATCH_THRESHOLD=0.8,
    )


@pytest.fixture
def listing_rows():
    return [
        {
            "ref": "R1001",
            "description": "Bright apartment near the beach.",
            "features": ["Terrace", "Air conditioning"],
            "town": "Alicante",
            "province": "Alicante",
            "country": "Spain",
            "price": 250000,
            "currency": "EUR",
            "beds": 2,
            "baths": 1,
            "pool": 0,
            "built": 85,
            "image_url": ["https://img.example.com/r1001-1.jpg", "https://img.example.com/r1001-2.jpg"],
            "url_en": "https://example.com/en/R1001",
            "url_es": "https://example.com/es/R1001",
            "similarity": 0.91,
        },
        {
            "ref": "R1002",
            "description": "Villa with private pool and sea views.",
            "features": "Garden, Garage",
            "town": "Jávea",
            "province": "Alicante",
            "country": "Spain",
            "price": 695000,
            "currency": "EUR",
            "beds": 4,
            "baths": 3,
            "pool": 1,
            "built": 240.5,
            "image_url": "https://img.example.com/r1002.jpg",
            "url_en": "https://example.com/en/R1002",
            "similarity": 0.87,
        },
        {
            "ref": "R1003",
            "description": "",
            "features": None,
            "town": "Altea",
            "province": "Alicante",
            "country": "Spain",
            "price": 310000,
            "currency": "EUR",
            "beds": 2,
            "baths": 2,
            "pool": True,
            "built": None,
            "image_url": [],
            "url_en": "https://example.com/en/R1003",
            "similarity": 0.82,
        },
    ]


@pytest.fixture
def store_recorder(listing_rows):
    return StoreRecorder(rows=listing_rows)


def build_store(recorder, settings):
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return ListingStore(client=client, settings=settings)


def build_workflow(openai_client, recorder, settings):
    return SearchWorkflow(
        llm=LLMService(client=openai_client, settings=settings),
        store=build_store(recorder, settings),
        assistant=AssistantService(client=openai_client, settings=settings),
        settings=settings,
    )
