"""Tests for intent parsing and the IntentAgent."""

import json

import pytest

from conftest import ALICANTE_INTENT, GENERAL_INTENT, make_openai_client
from listing_search.agents import IntentAgent, parse_intent
from listing_search.exceptions import InvalidInputError, ParseError
from listing_search.models import IntentType, Language, SearchFilters
from listing_search.prompts import INTENT_SYSTEM_PROMPT
from listing_search.services import LLMService


# ── parse_intent ────────────────────────────────────────────────────


class TestParseIntent:
    def test_plain_json(self):
        result = parse_intent(json.dumps(GENERAL_INTENT))
        assert result.language == Language.DUTCH
        assert result.intent == IntentType.GENERAL_QUESTION
        assert result.is_property_search is False
        assert result.filters == SearchFilters()

    def test_json_surrounded_by_prose(self):
        raw = "Sure! Here you go:\n```json\n" + json.dumps(ALICANTE_INTENT) + "\n```\nAnything else?"
        result = parse_intent(raw)
        assert result.is_property_search
        assert result.filters.min_bedrooms == 2
        assert result.filters.location == "Alicante"

    def test_wire_keys_round_trip(self):
        result = parse_intent(json.dumps(ALICANTE_INTENT))
        dumped = result.filters.model_dump(by_alias=True)
        assert dumped["min_slaapkamers"] == 2
        assert dumped["locatie"] == "Alicante"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_output(self, raw):
        with pytest.raises(ParseError, match="empty"):
            parse_intent(raw)

    def test_no_braces(self):
        with pytest.raises(ParseError, match="no JSON object"):
            parse_intent("I could not classify this message.")

    def test_closing_brace_before_opening(self):
        with pytest.raises(ParseError):
            parse_intent("} nothing here {")

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="invalid JSON"):
            parse_intent('{"taal": "en", "intentie": }')

    def test_unknown_intent(self):
        payload = dict(GENERAL_INTENT, intentie="koopadvies")
        with pytest.raises(ParseError, match="intentie"):
            parse_intent(json.dumps(payload))

    def test_unknown_language(self):
        payload = dict(GENERAL_INTENT, taal="sv")
        with pytest.raises(ParseError, match="taal"):
            parse_intent(json.dumps(payload))

    def test_missing_intent(self):
        with pytest.raises(ParseError):
            parse_intent('{"taal": "en"}')

    def test_wrong_filter_type(self):
        payload = dict(ALICANTE_INTENT, filters={"min_slaapkamers": "many"})
        with pytest.raises(ParseError, match="min_slaapkamers"):
            parse_intent(json.dumps(payload))

    def test_null_filters(self):
        payload = dict(ALICANTE_INTENT, filters=None)
        assert parse_intent(json.dumps(payload)).filters == SearchFilters()

    def test_pool_flag_as_number(self):
        payload = dict(ALICANTE_INTENT, filters={"zwembad": 1, "max_prijs": 400000})
        filters = parse_intent(json.dumps(payload)).filters
        assert filters.pool is True
        assert filters.max_price == 400000


# ── filter defaults ─────────────────────────────────────────────────


class TestFilterDefaults:
    def test_permissive_defaults(self):
        assert SearchFilters().to_rpc_params() == {
            "max_price": None,
            "min_baths": 1,
            "min_beds": 1,
            "pool_required": False,
        }

    def test_explicit_values(self):
        filters = SearchFilters(min_bedrooms=3, min_bathrooms=2, pool=True, max_price=500000)
        assert filters.to_rpc_params() == {
            "max_price": 500000,
            "min_baths": 2,
            "min_beds": 3,
            "pool_required": True,
        }

    def test_whole_float_price_becomes_int(self):
        params = SearchFilters(max_price=500000.0).to_rpc_params()
        assert params["max_price"] == 500000
        assert isinstance(params["max_price"], int)

    def test_zero_counts_fall_back_to_one(self):
        params = SearchFilters(min_bedrooms=0, min_bathrooms=0).to_rpc_params()
        assert params["min_beds"] == 1
        assert params["min_baths"] == 1


# ── IntentAgent ─────────────────────────────────────────────────────


class TestIntentAgent:
    @pytest.fixture
    def client(self):
        return make_openai_client(ALICANTE_INTENT)

    @pytest.fixture
    def agent(self, client, settings):
        return IntentAgent(LLMService(client=client, settings=settings), settings)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   ", None, 42])
    async def test_invalid_input_makes_no_call(self, agent, client, prompt):
        with pytest.raises(InvalidInputError):
            await agent.classify(prompt)
        client.chat.completions.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_alicante_scenario(self, agent):
        result = await agent.classify("I want an apartment with 2 bedrooms in Alicante")
        assert result.intent == IntentType.PROPERTY_SEARCH
        assert result.language == Language.ENGLISH
        assert result.filters.min_bedrooms == 2
        assert result.filters.location == "Alicante"
        assert result.filters.to_rpc_params()["min_beds"] == 2

    @pytest.mark.asyncio
    async def test_deterministic_call(self, agent, client):
        prompt = "I want an apartment with 2 bedrooms in Alicante"
        await agent.classify(prompt)

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["temperature"] == 0
        assert kwargs["messages"][0] == {"role": "system", "content": INTENT_SYSTEM_PROMPT}
        assert kwargs["messages"][-1] == {"role": "user", "content": prompt}

    @pytest.mark.asyncio
    async def test_idempotent(self, agent):
        prompt = "I want an apartment with 2 bedrooms in Alicante"
        first = await agent.classify(prompt)
        second = await agent.classify(prompt)
        assert first == second
        assert first.filters.to_rpc_params() == second.filters.to_rpc_params()

    @pytest.mark.asyncio
    async def test_unparseable_output(self, settings):
        client = make_openai_client("I am not sure what you mean.")
        agent = IntentAgent(LLMService(client=client, settings=settings), settings)
        with pytest.raises(ParseError):
            await agent.classify("hello")

    @pytest.mark.asyncio
    async def test_process_sets_state(self, agent):
        state = await agent.process({"prompt": "2 bedrooms in Alicante"})
        assert state["intent"].is_property_search

    def test_prompt_lists_languages(self):
        for language in ("Dutch", "English", "German", "Spanish", "French",
                         "Italian", "Portuguese", "Russian", "Norwegian"):
            assert language in INTENT_SYSTEM_PROMPT
        for value in IntentType:
            assert value.value in INTENT_SYSTEM_PROMPT
