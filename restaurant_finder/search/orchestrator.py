from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from ..errors import RestaurantFinderError
from ..intent.models import Intent, IntentAction
from ..intent.params import build_search_parameters
from ..llm.groq_client import IntentResolver
from ..places.client import PlacesClient
from .models import (
    EXECUTE_REQUEST_ADAPTER,
    ContinuationRequest,
    FreshRequest,
    Outcome,
    ResultKind,
    SearchResults,
)

logger = logging.getLogger(__name__)

NOT_RESTAURANT_MESSAGE = (
    "I can only help you find restaurants. "
    "Try asking about a cuisine, a place to eat, or a restaurant near you."
)
UNSUPPORTED_ACTION_MESSAGE = "Unsupported action"
FALLBACK_ERROR_MESSAGE = "Unknown error occurred"


def _validation_errors(exc: ValidationError) -> list[dict[str, Any]]:
    # Round-trip through JSON so error contexts are serialisable.
    return json.loads(exc.json(include_url=False))


def _failure(exc: Exception) -> Outcome:
    logger.error("Request failed: %s", exc, exc_info=exc)
    if isinstance(exc, RestaurantFinderError):
        message = exc.public_message
    else:
        message = FALLBACK_ERROR_MESSAGE
    return Outcome(kind=ResultKind.failure, message=message)


class RequestOrchestrator:
    """Single entry point for a restaurant search request.

    A request is either fresh (``{query}``) and goes through the intent
    resolver, or a continuation (``{query, cursor, params}``) that re-runs the
    carried intent against the next page. Every path ends in an
    :class:`Outcome`; nothing is raised to the caller.
    """

    def __init__(self, resolver: IntentResolver, places: PlacesClient) -> None:
        self._resolver = resolver
        self._places = places

    async def execute(self, payload: Any) -> Outcome:
        try:
            request = EXECUTE_REQUEST_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            logger.info("Rejected malformed request: %d error(s)", exc.error_count())
            return Outcome(kind=ResultKind.invalid_request, errors=_validation_errors(exc))

        try:
            if isinstance(request, ContinuationRequest):
                return await self._continue(request)
            return await self._fresh(request)
        except Exception as exc:
            return _failure(exc)

    async def generate(self, payload: Any) -> Outcome:
        """Resolve the intent for a fresh query without searching."""
        try:
            request = FreshRequest.model_validate(payload)
        except ValidationError as exc:
            return Outcome(kind=ResultKind.invalid_request, errors=_validation_errors(exc))

        try:
            intent = await self._resolver.resolve(request.query)
        except Exception as exc:
            return _failure(exc)
        return Outcome(kind=ResultKind.intent_resolved, intent=intent)

    async def _continue(self, request: ContinuationRequest) -> Outcome:
        return await self._search(request.params, cursor=request.cursor)

    async def _fresh(self, request: FreshRequest) -> Outcome:
        intent = await self._resolver.resolve(request.query)

        if intent.action == IntentAction.search:
            return await self._search(intent)
        if intent.action == IntentAction.error:
            logger.info("Query rejected as out of domain: %r", request.query)
            return Outcome(kind=ResultKind.not_restaurant_query, message=NOT_RESTAURANT_MESSAGE)

        logger.warning("Unsupported intent action %r", intent.action)
        return Outcome(kind=ResultKind.unsupported_action, message=UNSUPPORTED_ACTION_MESSAGE)

    async def _search(self, intent: Intent, cursor: str | None = None) -> Outcome:
        params = build_search_parameters(intent.parameters)
        page = await self._places.search(params, cursor=cursor)
        return Outcome(
            kind=ResultKind.results,
            payload=SearchResults(results=page.results, next_cursor=page.next_cursor, params=intent),
        )
