from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Day of week 1-7, then 'T', then HHMM in 24h time, e.g. "5T2130".
OPEN_AT_PATTERN = r"^[1-7]T([01]\d|2[0-3])[0-5]\d$"

PriceTier = Annotated[int, Field(ge=1, le=4)]
OpenAtCode = Annotated[str, Field(pattern=OPEN_AT_PATTERN)]


class IntentAction(str, Enum):
    search = "search"
    error = "error"


class SortOrder(str, Enum):
    relevance = "relevance"
    rating = "rating"
    distance = "distance"


class OpenNow(BaseModel):
    kind: Literal["open_now"] = "open_now"
    open: bool


class OpenAt(BaseModel):
    kind: Literal["open_at"] = "open_at"
    time: OpenAtCode


Availability = Annotated[Union[OpenNow, OpenAt], Field(discriminator="kind")]


class IntentParameters(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cuisine: str | None = None
    exact_name: str | None = None
    location: str | None = None
    min_price: PriceTier | None = None
    max_price: PriceTier | None = None
    availability: Availability | None = None
    sort_order: SortOrder | None = None


class Intent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: IntentAction
    parameters: IntentParameters = Field(default_factory=IntentParameters)


class ModelIntentParameters(BaseModel):
    """Flat parameter shape emitted by the language model.

    ``open_now`` and ``open_at_time`` arrive as separate nullable fields and are
    folded into a single ``availability`` variant by :meth:`to_parameters`.
    """

    model_config = ConfigDict(extra="forbid")

    cuisine: str | None
    exact_name: str | None
    location: str | None
    min_price: PriceTier | None
    max_price: PriceTier | None
    open_now: bool | None
    open_at_time: OpenAtCode | None
    sort_order: SortOrder | None

    @model_validator(mode="after")
    def _availability_is_exclusive(self) -> ModelIntentParameters:
        if self.open_now is not None and self.open_at_time is not None:
            raise ValueError("open_now and open_at_time are mutually exclusive")
        return self

    def to_parameters(self) -> IntentParameters:
        availability: OpenNow | OpenAt | None = None
        if self.open_now is not None:
            availability = OpenNow(open=self.open_now)
        elif self.open_at_time is not None:
            availability = OpenAt(time=self.open_at_time)

        return IntentParameters(
            cuisine=self.cuisine,
            exact_name=self.exact_name,
            location=self.location,
            min_price=self.min_price,
            max_price=self.max_price,
            availability=availability,
            sort_order=self.sort_order,
        )


class ModelIntent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: IntentAction
    parameters: ModelIntentParameters

    def to_intent(self) -> Intent:
        return Intent(action=self.action, parameters=self.parameters.to_parameters())

