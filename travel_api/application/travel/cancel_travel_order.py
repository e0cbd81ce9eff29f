"""
Use case: Cancel an approved travel order on behalf of its requester.

Input: CancelTravelOrderCommand (actor, order_id)
Output: None
Side effects: Soft-deletes the order and sets its status to Cancelled;
    emits a Disapproved lifecycle event after the write commits.
Failure cases: TravelOrderNotFoundError, PermissionDeniedError,
    TravelOrderStorageError.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from travel_api.application.travel.dtos import CancelTravelOrderCommand
from travel_api.domain.travel import policy
from travel_api.domain.travel.entities import (
    LifecycleEvent,
    LifecycleEventKind,
    TravelOrderStatus,
)
from travel_api.domain.travel.errors import (
    PermissionDeniedError,
    TravelOrderNotFoundError,
    TravelOrderStorageError,
)
from travel_api.domain.travel.ports import LifecycleEventNotifier, TravelOrderRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CancelTravelOrderUseCase:
    """Orchestrates the owner's cancellation of an approved trip.

    Only Approved orders exist for this lookup: an order in any other
    status is reported as not found, regardless of who owns it.
    """

    def __init__(
        self,
        order_repo: TravelOrderRepository,
        notifier: LifecycleEventNotifier,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = notifier
        self._clock = clock

    def execute(self, command: CancelTravelOrderCommand) -> None:
        """Run the cancellation use case.

        Args:
            command: The actor and the order to cancel.

        Raises:
            TravelOrderNotFoundError: If no Approved order has this id.
            PermissionDeniedError: If the actor is not the user-scope owner.
            TravelOrderStorageError: If the soft-delete could not be applied.
        """
        order = self._order_repo.find_by_id_with_status(
            command.order_id, TravelOrderStatus.APPROVED
        )
        if order is None:
            raise TravelOrderNotFoundError(command.order_id)

        if not policy.can_cancel(command.actor, order):
            logger.warning(
                "Cancellation denied: actor=%d, order=%d",
                command.actor.id,
                order.id,
            )
            raise PermissionDeniedError(
                "cancel", "You are not permitted to cancel this travel order."
            )

        if not self._order_repo.soft_delete(order.id, expected=TravelOrderStatus.APPROVED):
            raise TravelOrderStorageError(
                "cancel", f"travel order {order.id} could not be cancelled"
            )

        logger.info("Travel order %d cancelled by its requester", order.id)

        now = self._clock()
        cancelled = self._order_repo.find_by_id(order.id, include_deleted=True)
        if cancelled is None:
            logger.warning(
                "Travel order %d could not be re-read after cancellation", order.id
            )
            cancelled = replace(
                order, status=TravelOrderStatus.CANCELLED, deleted_at=now
            )
        self._notifier.notify(
            LifecycleEvent(
                kind=LifecycleEventKind.DISAPPROVED,
                order=cancelled,
                owner=cancelled.owner,
                occurred_at=now,
            )
        )
