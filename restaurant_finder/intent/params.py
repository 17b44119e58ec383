from __future__ import annotations

from .models import IntentParameters, OpenAt, OpenNow

PAGE_SIZE = 10

# Only the place fields the API layer returns to callers.
PLACE_FIELDS = (
    "fsq_id",
    "name",
    "location",
    "categories",
    "distance",
    "rating",
    "price",
    "hours",
    "photos",
    "website",
)


def build_search_parameters(parameters: IntentParameters) -> dict[str, str]:
    """Map intent parameters to places-search query-string parameters.

    Each rule is independent; a missing field omits its parameter. Price
    bounds are passed through without checking ``min_price <= max_price``,
    and availability is whatever variant the intent carries.
    """
    params: dict[str, str] = {}

    query = parameters.exact_name or parameters.cuisine
    if query:
        params["query"] = query

    if parameters.location:
        params["near"] = parameters.location

    if parameters.min_price is not None:
        params["min_price"] = str(parameters.min_price)
    if parameters.max_price is not None:
        params["max_price"] = str(parameters.max_price)

    availability = parameters.availability
    if isinstance(availability, OpenNow):
        params["open_now"] = "true" if availability.open else "false"
    elif isinstance(availability, OpenAt):
        params["open_at"] = availability.time

    if parameters.sort_order is not None:
        params["sort"] = parameters.sort_order.value.upper()

    params["fields"] = ",".join(PLACE_FIELDS)
    params["limit"] = str(PAGE_SIZE)
    return params
