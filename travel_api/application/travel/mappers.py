"""
Entity-to-DTO mapping shared by the travel use cases.
"""

from travel_api.application.travel.dtos import OwnerResult, TravelOrderResult
from travel_api.domain.travel.entities import TravelOrder


def to_travel_order_result(order: TravelOrder) -> TravelOrderResult:
    owner = None
    if order.owner is not None:
        owner = OwnerResult(
            id=order.owner.id,
            name=order.owner.name,
            email=order.owner.email,
        )

    return TravelOrderResult(
        id=order.id,
        requester_id=order.requester_id,
        city=order.city,
        state=order.state,
        country=order.country,
        departure_date=order.departure_date,
        return_date=order.return_date,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
        deleted_at=order.deleted_at,
        owner=owner,
    )
