from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from groq import APIConnectionError, APIStatusError, AsyncGroq
from pydantic import ValidationError

from ..errors import EmptyModelResponse, InvalidModelResponse, ModelUnavailable
from ..intent.models import Intent, ModelIntent
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Prompt & output contract
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
You are a restaurant search API that ONLY handles restaurant-related queries.

CRITICAL RULES:
- You can ONLY process restaurant search and food-related queries.
- For ANY query not about restaurants or food, respond with action "error" \
and set every parameter to null.
- Never answer questions about other topics even if requested.

RESTAURANT QUERY DETECTION:
- Valid: requests for restaurants, places to eat, cafes, diners, bars serving food.
- Invalid: weather, news, non-food travel, general chat, math, coding, etc.

PARAMETER EXTRACTION RULES:
- cuisine: the cuisine or type of restaurant, never the whole query. Use \
"restaurant" when the user names no cuisine.
- exact_name: the exact restaurant name if the user gives one, otherwise null.
- location: the place the user mentions, as a geocodable proper noun. Drop \
descriptive prefixes such as "downtown" or "uptown" ("downtown Los Angeles" \
becomes "Los Angeles").
- min_price / max_price: 1 to 4 (1 = cheapest). "cheap" -> 1, \
"moderate/affordable" -> 2, "expensive" -> 3, "very expensive/luxury" -> 4. \
For a single price word set both bounds to the same value.
- open_now: true only if the user asks about current availability.
- open_at_time: only when the user asks for a specific day and time, as \
<day>T<HHMM> where day is 1 (Monday) to 7 (Sunday) and HHMM is 24h time, \
e.g. "5T2000" for Friday 8pm. Never set both open_now and open_at_time.
- sort_order: "rating", "distance" or "relevance" only if the user asks for \
an ordering, otherwise null.

EXAMPLES:
1. "Find me a cheap sushi restaurant in downtown Los Angeles that's open now"
   {"action":"search","parameters":{"cuisine":"sushi","exact_name":null,\
"location":"Los Angeles","min_price":1,"max_price":1,"open_now":true,\
"open_at_time":null,"sort_order":null}}
2. "What's the weather like today?"
   {"action":"error","parameters":{"cuisine":null,"exact_name":null,\
"location":null,"min_price":null,"max_price":null,"open_now":null,\
"open_at_time":null,"sort_order":null}}"""


def _nullable(json_type: str, description: str, **extra: Any) -> dict[str, Any]:
    return {"type": [json_type, "null"], "description": description, **extra}


_PARAMETER_PROPERTIES: dict[str, Any] = {
    "cuisine": _nullable("string", "Cuisine or type of restaurant, not the whole query."),
    "exact_name": _nullable("string", "Exact restaurant name mentioned by the user."),
    "location": _nullable("string", "Geocodable place name without descriptive prefixes."),
    "min_price": _nullable("integer", "Minimum price tier, 1 to 4 (1 = cheapest)."),
    "max_price": _nullable("integer", "Maximum price tier, 1 to 4 (1 = cheapest)."),
    "open_now": _nullable("boolean", "True if the user asks for places open now."),
    "open_at_time": _nullable("string", "Day and time code such as 5T2000."),
    "sort_order": _nullable(
        "string",
        "Requested result ordering.",
        enum=["relevance", "rating", "distance", None],
    ),
}

RESPONSE_SCHEMA: dict[str, Any] = {
    "name": "restaurant_search",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["search", "error"],
                "description": "search for restaurant queries, error for anything else",
            },
            "parameters": {
                "type": "object",
                "properties": _PARAMETER_PROPERTIES,
                "required": list(_PARAMETER_PROPERTIES),
                "additionalProperties": False,
            },
        },
        "required": ["action", "parameters"],
        "additionalProperties": False,
    },
}

# Diagnostic only; callers always see the generic message.
_STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request parameters",
    401: "Authentication failed. Please check your API key",
    403: "You do not have permission to perform this action",
    404: "The requested resource was not found",
    422: "The request was well-formed but could not be processed",
    429: "Rate limit exceeded. Please try again later",
    500: "The server encountered an error",
    502: "Bad gateway error",
    503: "Service unavailable",
    504: "Gateway timeout",
}


def describe_status_error(exc: APIStatusError) -> str:
    message = _STATUS_MESSAGES.get(exc.status_code)
    if message:
        return f"Groq API Error: {message} - {exc.message}"
    return f"Groq API Error: Status {exc.status_code} - {exc.message}"


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class IntentResolver:
    """Turns a free-text query into a validated :class:`Intent`."""

    def __init__(
        self,
        config: LLMConfig = DEFAULT_LLM_CONFIG,
        client: AsyncGroq | None = None,
    ) -> None:
        self._config = config
        self._client = client or AsyncGroq(
            api_key=config.api_key,
            timeout=config.timeout,
            max_retries=0,
        )

    async def resolve(self, query: str) -> Intent:
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._config.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": query},
                    ],
                    max_tokens=self._config.max_tokens,
                    temperature=self._config.temperature,
                    response_format={"type": "json_schema", "json_schema": RESPONSE_SCHEMA},
                ),
                timeout=self._config.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Groq API Error: no response within %.1fs", self._config.timeout)
            raise ModelUnavailable("model call timed out") from exc
        except APIStatusError as exc:
            logger.error(describe_status_error(exc))
            raise ModelUnavailable(f"status {exc.status_code}") from exc
        except APIConnectionError as exc:
            logger.error("Groq SDK Error: %s", exc)
            raise ModelUnavailable("connection failed") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            logger.error("Groq returned an empty response for query %r", query)
            raise EmptyModelResponse("Empty LLM response")

        try:
            payload = json.loads(content)
            model_intent = ModelIntent.model_validate(payload)
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.error("Invalid LLM response: %s", exc)
            raise InvalidModelResponse("Invalid LLM response") from exc

        intent = model_intent.to_intent()
        logger.info("Resolved query %r to action=%s", query, intent.action.value)
        return intent

    async def close(self) -> None:
        await self._client.close()
