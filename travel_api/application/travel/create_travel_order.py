"""
Use case: Request a new business trip.

Input: CreateTravelOrderCommand (actor, destination, dates)
Output: TravelOrderResult
Side effects: Persists a travel order with status Requested.
Failure cases: PermissionDeniedError, InvalidTravelOrderError.
"""

import logging
from datetime import date
from typing import Callable

from travel_api.application.travel.dtos import CreateTravelOrderCommand, TravelOrderResult
from travel_api.application.travel.mappers import to_travel_order_result
from travel_api.domain.travel import policy
from travel_api.domain.travel.entities import NewTravelOrder, TravelOrderStatus
from travel_api.domain.travel.errors import PermissionDeniedError
from travel_api.domain.travel.lifecycle import validate_new_order
from travel_api.domain.travel.ports import TravelOrderRepository

logger = logging.getLogger(__name__)


class CreateTravelOrderUseCase:
    """Orchestrates creation of a travel order.

    The requester is always the authenticated actor and the initial
    status is always Requested, whatever the client sent.
    """

    def __init__(
        self,
        order_repo: TravelOrderRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._order_repo = order_repo
        self._today = today

    def execute(self, command: CreateTravelOrderCommand) -> TravelOrderResult:
        """Run the creation use case.

        Args:
            command: Destination and dates requested by the actor.

        Returns:
            The created travel order.

        Raises:
            PermissionDeniedError: If the actor lacks user scope.
            InvalidTravelOrderError: If a creation invariant is violated.
        """
        actor = command.actor
        if not policy.can_create(actor):
            raise PermissionDeniedError(
                "create", "You are not permitted to create travel orders."
            )

        new_order = NewTravelOrder(
            requester_id=actor.id,
            city=command.city.strip(),
            state=command.state.strip(),
            country=command.country.strip(),
            departure_date=command.departure_date,
            return_date=command.return_date,
            status=TravelOrderStatus.REQUESTED,
        )
        validate_new_order(new_order, today=self._today())

        created = self._order_repo.create(new_order)
        logger.info(
            "Travel order created: id=%d, requester=%d", created.id, created.requester_id
        )
        return to_travel_order_result(created)
