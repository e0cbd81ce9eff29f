"""
Domain service: Travel order lifecycle rules.

Encodes the status state machine and the creation invariants:

    Requested --(admin, not owner)--> Approved
    Requested --(admin, not owner)--> Cancelled
    Approved  --(owner, cancel)-----> Cancelled

Approved and Cancelled are terminal for status transitions;
Cancelled is terminal overall.
"""

from datetime import date

from travel_api.domain.travel.entities import (
    LifecycleEventKind,
    NewTravelOrder,
    TravelOrder,
    TravelOrderStatus,
)
from travel_api.domain.travel.errors import InvalidTravelOrderError

ASSESSMENT_TARGETS = frozenset({TravelOrderStatus.APPROVED, TravelOrderStatus.CANCELLED})

CITY_LENGTH = (2, 70)
STATE_LENGTH = (2, 50)
COUNTRY_LENGTH = (2, 60)


def is_assessable(order: TravelOrder) -> bool:
    """Return True while the order is still awaiting an admin decision."""
    return order.status is TravelOrderStatus.REQUESTED and not order.is_deleted


def is_cancellable(order: TravelOrder) -> bool:
    return order.status is TravelOrderStatus.APPROVED and not order.is_deleted


def ensure_assessment_target(status: TravelOrderStatus) -> None:
    """Reject transition targets other than Approved or Cancelled."""
    if status not in ASSESSMENT_TARGETS:
        raise InvalidTravelOrderError(
            "status", "The status must be 'Approved' or 'Cancelled'."
        )


def event_kind_for(status: TravelOrderStatus) -> LifecycleEventKind:
    if status is TravelOrderStatus.APPROVED:
        return LifecycleEventKind.APPROVED
    return LifecycleEventKind.DISAPPROVED


def _check_length(field: str, label: str, value: str, bounds: tuple[int, int]) -> None:
    low, high = bounds
    length = len(value.strip())
    if length < low:
        raise InvalidTravelOrderError(
            field, f"The {label} must have at least {low} characters."
        )
    if length > high:
        raise InvalidTravelOrderError(
            field, f"The {label} must have at most {high} characters."
        )


def validate_new_order(order: NewTravelOrder, today: date) -> None:
    """Enforce creation invariants.

    Args:
        order: The order about to be persisted.
        today: Reference date; departure must be strictly after it.

    Raises:
        InvalidTravelOrderError: On the first violated rule.
    """
    _check_length("city", "city", order.city, CITY_LENGTH)
    _check_length("state", "state", order.state, STATE_LENGTH)
    _check_length("country", "country", order.country, COUNTRY_LENGTH)

    if order.departure_date <= today:
        raise InvalidTravelOrderError(
            "departure_date", "The departure date must be after today."
        )
    if order.return_date < order.departure_date:
        raise InvalidTravelOrderError(
            "return_date",
            "The return date must be equal to or after the departure date.",
        )
