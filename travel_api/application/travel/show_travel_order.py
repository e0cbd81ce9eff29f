"""
Use case: Read a single travel order.

Input: ShowTravelOrderQuery (actor, order_id)
Output: TravelOrderResult with the owner profile embedded
Side effects: None (read-only query).
Failure cases: TravelOrderNotFoundError, PermissionDeniedError.
"""

import logging

from travel_api.application.travel.dtos import ShowTravelOrderQuery, TravelOrderResult
from travel_api.application.travel.mappers import to_travel_order_result
from travel_api.domain.travel import policy
from travel_api.domain.travel.errors import PermissionDeniedError, TravelOrderNotFoundError
from travel_api.domain.travel.ports import TravelOrderRepository

logger = logging.getLogger(__name__)


class ShowTravelOrderUseCase:
    """Orchestrates reading one travel order, soft-deleted ones included.

    Existence is confirmed before the view policy so that a foreign
    order yields a permission error rather than not-found.
    """

    def __init__(self, order_repo: TravelOrderRepository) -> None:
        self._order_repo = order_repo

    def execute(self, query: ShowTravelOrderQuery) -> TravelOrderResult:
        order = self._order_repo.find_by_id(query.order_id, include_deleted=True)
        if order is None:
            raise TravelOrderNotFoundError(query.order_id)

        if not policy.can_view(query.actor, order):
            logger.warning(
                "View denied: actor=%d, order=%d", query.actor.id, order.id
            )
            raise PermissionDeniedError(
                "view", "You are not permitted to view this travel order."
            )

        return to_travel_order_result(order)
