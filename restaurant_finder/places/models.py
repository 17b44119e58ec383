from __future__ import annotations

from pydantic import BaseModel, Field

# Vendor fields not declared here are dropped on validation.


class Icon(BaseModel):
    prefix: str
    suffix: str


class Category(BaseModel):
    id: int | str
    name: str
    short_name: str | None = None
    icon: Icon | None = None


class PlaceLocation(BaseModel):
    address: str | None = None
    locality: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None
    formatted_address: str | None = None


class Hours(BaseModel):
    display: str | None = None
    open_now: bool | None = None


class Photo(BaseModel):
    id: str
    prefix: str
    suffix: str
    width: int | None = None
    height: int | None = None


class Place(BaseModel):
    fsq_id: str
    name: str
    location: PlaceLocation = Field(default_factory=PlaceLocation)
    categories: list[Category] = Field(default_factory=list)
    distance: int | None = None
    rating: float | None = Field(default=None, ge=0.0, le=10.0)
    price: int | None = Field(default=None, ge=1, le=4)
    hours: Hours | None = None
    photos: list[Photo] = Field(default_factory=list)
    website: str | None = None


class PlacesSearchResponse(BaseModel):
    results: list[Place]


class SearchPage(BaseModel):
    results: list[Place]
    next_cursor: str | None = None
