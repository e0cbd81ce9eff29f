"""
Port interfaces (ABCs) for the travel bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from travel_api.domain.travel.entities import (
    LifecycleEvent,
    NewTravelOrder,
    TravelOrder,
    TravelOrderCriteria,
    TravelOrderPage,
    TravelOrderStatus,
)


class TravelOrderRepository(ABC):
    """Port for persisting and querying travel orders.

    Soft-deleted orders keep their row with ``deleted_at`` set. Lookups
    exclude them unless asked otherwise.
    """

    @abstractmethod
    def create(self, order: NewTravelOrder) -> TravelOrder:
        """Persist a new travel order and return it with identity and timestamps."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(
        self, order_id: int, include_deleted: bool = False
    ) -> Optional[TravelOrder]:
        """Return a travel order with its owner profile, or None.

        Args:
            order_id: Identity of the order.
            include_deleted: Also match soft-deleted orders.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id_with_status(
        self, order_id: int, status: TravelOrderStatus
    ) -> Optional[TravelOrder]:
        """Return a non-deleted order only if it currently has ``status``."""
        raise NotImplementedError

    @abstractmethod
    def list(self, criteria: TravelOrderCriteria) -> TravelOrderPage:
        """Return one page of orders matching the criteria.

        Items embed the owner's id and name.
        """
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self,
        order_id: int,
        expected: TravelOrderStatus,
        new: TravelOrderStatus,
    ) -> Optional[TravelOrder]:
        """Atomically move a non-deleted order from ``expected`` to ``new``.

        Returns:
            The updated order, or None when the order was no longer in
            the expected status at write time.

        Raises:
            TravelOrderStorageError: If the storage layer fails.
        """
        raise NotImplementedError

    @abstractmethod
    def soft_delete(self, order_id: int, expected: TravelOrderStatus) -> bool:
        """Mark a non-deleted order in ``expected`` status as deleted and Cancelled.

        Returns:
            True if a row was updated.

        Raises:
            TravelOrderStorageError: If the storage layer fails.
        """
        raise NotImplementedError


class LifecycleEventNotifier(ABC):
    """Port for handing lifecycle events to asynchronous delivery.

    Implementations must return without waiting for delivery and must
    not raise delivery failures to the caller.
    """

    @abstractmethod
    def notify(self, event: LifecycleEvent) -> None:
        """Publish a lifecycle event."""
        raise NotImplementedError
