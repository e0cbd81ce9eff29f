"""
Pydantic schemas for travel order API request/response validation.

These schemas enforce input validation and define the API contract.
Date rules that depend on "today" are enforced by the domain, not here.
No business logic belongs here.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from travel_api.domain.travel.lifecycle import (
    CITY_LENGTH,
    COUNTRY_LENGTH,
    STATE_LENGTH,
)


class CreateTravelOrderRequest(BaseModel):
    """Request schema for creating a travel order.

    Unknown keys (such as a client-supplied ``status`` or ``user_id``)
    are ignored; the requester is always the authenticated caller.

    Attributes:
        city: Destination city (2-70 chars).
        state: Destination state or region (2-50 chars).
        country: Destination country (2-60 chars).
        departure_date: Day of departure, strictly after today.
        return_date: Day of return, on or after departure.
    """

    model_config = ConfigDict(extra="ignore")

    city: str = Field(..., min_length=CITY_LENGTH[0], max_length=CITY_LENGTH[1])
    state: str = Field(..., min_length=STATE_LENGTH[0], max_length=STATE_LENGTH[1])
    country: str = Field(
        ..., min_length=COUNTRY_LENGTH[0], max_length=COUNTRY_LENGTH[1]
    )
    departure_date: date
    return_date: date


class UpdateTravelOrderStatusRequest(BaseModel):
    """Request schema for an admin assessment."""

    status: Literal["Approved", "Cancelled"] = Field(
        ..., description="Target status of the assessment"
    )


class OwnerSchema(BaseModel):
    """Public profile of the order's requester."""

    id: int
    name: str
    email: str | None = None


class TravelOrderResponse(BaseModel):
    """A single travel order as exposed by the API."""

    id: int
    user_id: int
    city: str
    state: str
    country: str
    departure_date: date
    return_date: date
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    owner: OwnerSchema | None = None


class TravelOrderListResponse(BaseModel):
    """One page of travel orders with navigation links.

    Link URLs carry the caller's filters so that following them keeps
    the same listing.
    """

    data: list[TravelOrderResponse]
    current_page: int
    per_page: int
    last_page: int
    total: int
    path: str
    first_page_url: str
    last_page_url: str
    next_page_url: str | None = None
    prev_page_url: str | None = None
    filters: dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    database: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
