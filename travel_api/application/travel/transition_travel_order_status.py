"""
Use case: Assess a requested travel order (approve or disapprove).

Input: TransitionTravelOrderStatusCommand (actor, order_id, status)
Output: TravelOrderResult
Side effects: Updates the order status; emits an Approved or
    Disapproved lifecycle event after the write commits.
Failure cases: InvalidTravelOrderError, TravelOrderNotFoundError,
    PermissionDeniedError, AlreadyAssessedError, TravelOrderStorageError.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from travel_api.application.travel.dtos import (
    TransitionTravelOrderStatusCommand,
    TravelOrderResult,
)
from travel_api.application.travel.mappers import to_travel_order_result
from travel_api.domain.travel import policy
from travel_api.domain.travel.entities import LifecycleEvent, TravelOrderStatus
from travel_api.domain.travel.errors import (
    AlreadyAssessedError,
    PermissionDeniedError,
    TravelOrderNotFoundError,
)
from travel_api.domain.travel.lifecycle import (
    ensure_assessment_target,
    event_kind_for,
    is_assessable,
)
from travel_api.domain.travel.ports import LifecycleEventNotifier, TravelOrderRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransitionTravelOrderStatusUseCase:
    """Orchestrates an admin decision on a Requested order.

    The "still Requested" precondition is checked on read and again by
    the repository's conditional write, so concurrent assessments of the
    same order cannot both succeed.
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

    def execute(self, command: TransitionTravelOrderStatusCommand) -> TravelOrderResult:
        """Run the status transition use case.

        Args:
            command: Target order and the new status.

        Returns:
            The updated travel order.

        Raises:
            InvalidTravelOrderError: If the target status is not Approved/Cancelled.
            TravelOrderNotFoundError: If the order is absent or soft-deleted.
            PermissionDeniedError: If the actor lacks admin scope or owns the order.
            AlreadyAssessedError: If the order is no longer Requested.
        """
        ensure_assessment_target(command.status)

        order = self._order_repo.find_by_id(command.order_id)
        if order is None:
            raise TravelOrderNotFoundError(command.order_id)

        if not policy.can_transition_status(command.actor, order):
            logger.warning(
                "Status change denied: actor=%d, order=%d",
                command.actor.id,
                order.id,
            )
            raise PermissionDeniedError(
                "transition_status",
                "You are not permitted to change the status of this travel order.",
            )

        if not is_assessable(order):
            raise AlreadyAssessedError(order.id)

        updated = self._order_repo.update_status(
            order.id,
            expected=TravelOrderStatus.REQUESTED,
            new=command.status,
        )
        if updated is None:
            logger.warning("Order %d was assessed concurrently", order.id)
            raise AlreadyAssessedError(order.id)

        logger.info(
            "Travel order %d moved to %s by actor=%d",
            updated.id,
            updated.status.value,
            command.actor.id,
        )

        self._notifier.notify(
            LifecycleEvent(
                kind=event_kind_for(updated.status),
                order=updated,
                owner=updated.owner,
                occurred_at=self._clock(),
            )
        )
        return to_travel_order_result(updated)
