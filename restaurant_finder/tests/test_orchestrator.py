from __future__ import annotations

import pytest

from restaurant_finder.errors import EmptyModelResponse, SearchUnavailable
from restaurant_finder.intent.models import Intent
from restaurant_finder.search.models import ResultKind
from restaurant_finder.search.orchestrator import (
    FALLBACK_ERROR_MESSAGE,
    NOT_RESTAURANT_MESSAGE,
    RequestOrchestrator,
)

from ._helpers import SUSHI_INTENT, FakePlaces, FakeResolver


def _orchestrator(resolver: FakeResolver, places: FakePlaces) -> RequestOrchestrator:
    return RequestOrchestrator(resolver, places)  # type: ignore[arg-type]


# ── Validation ───────────────────────────────────────────────────────────


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"query": ""},
            {"query": 42},
            {"query": "sushi", "cursor": "abc"},
            {"query": "sushi", "params": SUSHI_INTENT},
            {"query": "sushi", "cursor": "abc", "params": {"action": "dance"}},
            ["sushi"],
            None,
        ],
    )
    async def test_malformed_payload_makes_no_calls(self, payload):
        resolver, places = FakeResolver(), FakePlaces()

        outcome = await _orchestrator(resolver, places).execute(payload)

        assert outcome.kind == ResultKind.invalid_request
        assert outcome.errors
        assert resolver.queries == []
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_errors_are_structured(self):
        outcome = await _orchestrator(FakeResolver(), FakePlaces()).execute({})

        for error in outcome.errors:
            assert {"type", "loc", "msg"} <= set(error)


# ── Fresh path ───────────────────────────────────────────────────────────


class TestFreshPath:
    @pytest.mark.asyncio
    async def test_search_action(self, sushi_intent):
        resolver = FakeResolver(sushi_intent)
        places = FakePlaces(next_cursor="next-1")

        outcome = await _orchestrator(resolver, places).execute(
            {"query": "Find cheap sushi in New York that's open now"}
        )

        assert outcome.kind == ResultKind.results
        assert resolver.queries == ["Find cheap sushi in New York that's open now"]
        params, cursor = places.calls[0]
        assert cursor is None
        assert params["query"] == "sushi"
        assert params["near"] == "New York"
        assert params["open_now"] == "true"
        assert outcome.payload.next_cursor == "next-1"
        assert outcome.payload.params == sushi_intent
        assert len(outcome.payload.results) == 1

    @pytest.mark.asyncio
    async def test_error_action_is_domain_rejection(self, rejected_intent):
        places = FakePlaces()

        outcome = await _orchestrator(FakeResolver(rejected_intent), places).execute(
            {"query": "What's the weather today?"}
        )

        assert outcome.kind == ResultKind.not_restaurant_query
        assert outcome.message == NOT_RESTAURANT_MESSAGE
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_unknown_action_is_unsupported(self):
        intent = Intent.model_construct(action="book_table", parameters=None)
        places = FakePlaces()

        outcome = await _orchestrator(FakeResolver(intent), places).execute({"query": "book it"})

        assert outcome.kind == ResultKind.unsupported_action
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_model_failure_uses_public_message(self):
        resolver = FakeResolver(error=EmptyModelResponse("Empty LLM response"))

        outcome = await _orchestrator(resolver, FakePlaces()).execute({"query": "sushi"})

        assert outcome.kind == ResultKind.failure
        assert outcome.message == EmptyModelResponse.public_message
        assert "Empty LLM response" not in outcome.message

    @pytest.mark.asyncio
    async def test_unexpected_failure_uses_fallback(self):
        resolver = FakeResolver(error=RuntimeError("secret internals"))

        outcome = await _orchestrator(resolver, FakePlaces()).execute({"query": "sushi"})

        assert outcome.kind == ResultKind.failure
        assert outcome.message == FALLBACK_ERROR_MESSAGE


# ── Continuation path ────────────────────────────────────────────────────


class TestContinuationPath:
    @pytest.mark.asyncio
    async def test_skips_resolver_and_passes_cursor(self, sushi_intent):
        resolver = FakeResolver(error=AssertionError("resolver must not be called"))
        places = FakePlaces(next_cursor=None)

        outcome = await _orchestrator(resolver, places).execute(
            {"query": "sushi", "cursor": "cursor-2", "params": SUSHI_INTENT}
        )

        assert outcome.kind == ResultKind.results
        assert resolver.queries == []
        params, cursor = places.calls[0]
        assert cursor == "cursor-2"
        assert params["query"] == "sushi"
        assert outcome.payload.params == sushi_intent
        assert outcome.payload.next_cursor is None

    @pytest.mark.asyncio
    async def test_search_failure(self):
        places = FakePlaces(error=SearchUnavailable("status 401"))

        outcome = await _orchestrator(FakeResolver(), places).execute(
            {"query": "sushi", "cursor": "cursor-2", "params": SUSHI_INTENT}
        )

        assert outcome.kind == ResultKind.failure
        assert outcome.message == SearchUnavailable.public_message


# ── Generate ─────────────────────────────────────────────────────────────


class TestGenerate:
    @pytest.mark.asyncio
    async def test_returns_intent_without_searching(self, sushi_intent):
        places = FakePlaces()

        outcome = await _orchestrator(FakeResolver(sushi_intent), places).generate({"query": "sushi"})

        assert outcome.kind == ResultKind.intent_resolved
        assert outcome.intent == sushi_intent
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_rejects_continuation_shape(self):
        outcome = await _orchestrator(FakeResolver(), FakePlaces()).generate(
            {"query": "sushi", "cursor": "c"}
        )

        assert outcome.kind == ResultKind.invalid_request
