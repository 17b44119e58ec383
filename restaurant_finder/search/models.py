from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..intent.models import Intent
from ..places.models import Place


class FreshRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1)


class ContinuationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1)
    cursor: str = Field(..., min_length=1)
    params: Intent


ExecuteRequest = Union[ContinuationRequest, FreshRequest]
EXECUTE_REQUEST_ADAPTER: TypeAdapter[ExecuteRequest] = TypeAdapter(ExecuteRequest)


class ResultKind(str, Enum):
    results = "results"
    intent_resolved = "intent_resolved"
    invalid_request = "invalid_request"
    not_restaurant_query = "not_restaurant_query"
    unsupported_action = "unsupported_action"
    failure = "failure"


class SearchResults(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    results: list[Place]
    next_cursor: str | None = Field(default=None, alias="nextCursor")
    params: Intent


class Outcome(BaseModel):
    kind: ResultKind
    payload: SearchResults | None = None
    intent: Intent | None = None
    message: str | None = None
    errors: list[dict[str, Any]] = Field(default_factory=list)
