from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import DEFAULT_SERVER_CONFIG, LOG_FORMAT
from .llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .llm.groq_client import IntentResolver
from .places.client import PlacesClient
from .places.config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .search.models import Outcome, ResultKind
from .search.orchestrator import RequestOrchestrator

logger = logging.getLogger(__name__)

# unsupported_action answers 200 with success:false in the body.
_STATUS_BY_KIND: dict[ResultKind, int] = {
    ResultKind.results: 200,
    ResultKind.intent_resolved: 200,
    ResultKind.invalid_request: 400,
    ResultKind.not_restaurant_query: 400,
    ResultKind.unsupported_action: 200,
    ResultKind.failure: 500,
}


def create_orchestrator(
    http_client: httpx.AsyncClient,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    places_config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> tuple[RequestOrchestrator, IntentResolver]:
    resolver = IntentResolver(llm_config)
    places = PlacesClient(http_client, places_config)
    return RequestOrchestrator(resolver, places), resolver


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(
        level=DEFAULT_SERVER_CONFIG.log_level,
        format=LOG_FORMAT,
    )
    async with httpx.AsyncClient(timeout=DEFAULT_PLACES_CONFIG.timeout) as http_client:
        orchestrator, resolver = create_orchestrator(http_client)
        app.state.orchestrator = orchestrator
        logger.info("Restaurant finder ready (model=%s)", DEFAULT_LLM_CONFIG.model)
        try:
            yield
        finally:
            await resolver.close()


app = FastAPI(title="Restaurant Finder API", version="1.0.0", lifespan=lifespan)


def get_orchestrator(request: Request) -> RequestOrchestrator:
    return request.app.state.orchestrator


def render_outcome(outcome: Outcome) -> JSONResponse:
    status = _STATUS_BY_KIND[outcome.kind]
    body: dict[str, Any]

    if outcome.kind == ResultKind.results and outcome.payload is not None:
        body = outcome.payload.model_dump(mode="json", by_alias=True)
    elif outcome.kind == ResultKind.intent_resolved and outcome.intent is not None:
        body = outcome.intent.model_dump(mode="json")
    elif outcome.kind == ResultKind.invalid_request:
        body = {"error": outcome.errors}
    elif outcome.kind == ResultKind.not_restaurant_query:
        body = {"success": False, "error": outcome.message, "isRestaurantQuery": False}
    elif outcome.kind == ResultKind.unsupported_action:
        body = {"success": False, "error": outcome.message}
    else:
        body = {"error": outcome.message}

    return JSONResponse(status_code=status, content=body)


async def _read_json(request: Request) -> tuple[Any, JSONResponse | None]:
    try:
        return await request.json(), None
    except ValueError as exc:
        errors = [{"type": "json_invalid", "loc": ["body"], "msg": f"Invalid JSON: {exc}"}]
        return None, JSONResponse(status_code=400, content={"error": errors})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/execute")
async def execute(
    request: Request,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    payload, error_response = await _read_json(request)
    if error_response is not None:
        return error_response
    return render_outcome(await orchestrator.execute(payload))


@app.post("/api/generate")
async def generate(
    request: Request,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    payload, error_response = await _read_json(request)
    if error_response is not None:
        return error_response
    return render_outcome(await orchestrator.generate(payload))
