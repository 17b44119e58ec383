from __future__ import annotations

QUERY_FAILED_MESSAGE = (
    "We couldn't process your restaurant query at this time. Please try again later."
)
SEARCH_FAILED_MESSAGE = (
    "We couldn't retrieve restaurant information at this time. Please try again later."
)


class RestaurantFinderError(Exception):
    """Base error. ``public_message`` is safe to return to API callers."""

    public_message = "Unknown error occurred"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail


class IntentResolutionError(RestaurantFinderError):
    public_message = QUERY_FAILED_MESSAGE


class EmptyModelResponse(IntentResolutionError):
    pass


class InvalidModelResponse(IntentResolutionError):
    pass


class ModelUnavailable(IntentResolutionError):
    pass


class SearchError(RestaurantFinderError):
    public_message = SEARCH_FAILED_MESSAGE


class SearchUnavailable(SearchError):
    pass


class MalformedUpstreamResponse(SearchError):
    pass
