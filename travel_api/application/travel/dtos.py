"""
Data Transfer Objects for the travel application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from travel_api.domain.travel.entities import Actor, TravelOrderStatus

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class ListTravelOrdersQuery:
    """Input DTO for listing travel orders.

    Attributes:
        actor: The authenticated caller.
        status: Optional exact status filter.
        city: Optional exact city filter.
        state: Optional exact state/region filter.
        start_date: Optional lower bound on departure date.
        end_date: Optional upper bound on return date.
        per_page: Page size. None means the use case default (20).
        page: 1-based page number.
    """

    actor: Actor
    status: TravelOrderStatus | None = None
    city: str | None = None
    state: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    per_page: int | None = None
    page: int = 1


@dataclass(frozen=True)
class CreateTravelOrderCommand:
    """Input DTO for requesting a new trip.

    The requester is always the actor; no owner field is accepted.
    """

    actor: Actor
    city: str
    state: str
    country: str
    departure_date: date
    return_date: date


@dataclass(frozen=True)
class ShowTravelOrderQuery:
    """Input DTO for reading a single travel order."""

    actor: Actor
    order_id: int


@dataclass(frozen=True)
class TransitionTravelOrderStatusCommand:
    """Input DTO for an admin assessment.

    Attributes:
        actor: The assessing admin.
        order_id: Target order.
        status: Approved or Cancelled.
    """

    actor: Actor
    order_id: int
    status: TravelOrderStatus


@dataclass(frozen=True)
class CancelTravelOrderCommand:
    """Input DTO for an owner cancelling an approved trip."""

    actor: Actor
    order_id: int


@dataclass(frozen=True)
class OwnerResult:
    """Output DTO for the owner's public profile."""

    id: int
    name: str
    email: str | None = None


@dataclass(frozen=True)
class TravelOrderResult:
    """Output DTO for a single travel order."""

    id: int
    requester_id: int
    city: str
    state: str
    country: str
    departure_date: date
    return_date: date
    status: str
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None
    owner: OwnerResult | None = None


@dataclass(frozen=True)
class TravelOrderPageResult:
    """Output DTO for a page of travel orders.

    Attributes:
        items: Orders on this page.
        current_page: 1-based page number.
        per_page: Page size used.
        last_page: Number of the last page (at least 1).
        total: Total matching orders across pages.
        applied_filters: Echo of the filters supplied by the caller,
            keyed by their query parameter names, for link rebuilding.
    """

    items: list[TravelOrderResult]
    current_page: int
    per_page: int
    last_page: int
    total: int
    applied_filters: dict[str, str] = field(default_factory=dict)
