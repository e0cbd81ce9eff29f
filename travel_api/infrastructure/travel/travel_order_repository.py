"""
Adapter: Travel order repository.

Implements TravelOrderRepository port on top of SQLAlchemy Core.
Listing filters are composed into a single WHERE clause; mutations are
conditional UPDATEs keyed on the current status so that a concurrent
writer cannot slip between the read and the write.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from travel_api.domain.travel.entities import (
    NewTravelOrder,
    OwnerProfile,
    TravelOrder,
    TravelOrderCriteria,
    TravelOrderPage,
    TravelOrderStatus,
)
from travel_api.domain.travel.errors import TravelOrderStorageError
from travel_api.domain.travel.ports import TravelOrderRepository
from travel_api.infrastructure.travel.tables import travel_orders, users

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _order_select():
    """SELECT travel_orders joined with the owner's profile columns."""
    return select(
        travel_orders,
        users.c.name.label("owner_name"),
        users.c.email.label("owner_email"),
    ).select_from(
        travel_orders.outerjoin(users, users.c.id == travel_orders.c.user_id)
    )


def _row_to_order(row: Any, with_email: bool = True) -> TravelOrder:
    data = row._mapping
    owner = None
    if data["owner_name"] is not None:
        owner = OwnerProfile(
            id=data["user_id"],
            name=data["owner_name"],
            email=data["owner_email"] if with_email else None,
        )

    return TravelOrder(
        id=data["id"],
        requester_id=data["user_id"],
        city=data["city"],
        state=data["state"],
        country=data["country"],
        departure_date=data["departure_date"],
        return_date=data["return_date"],
        status=TravelOrderStatus(data["status"]),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        deleted_at=data["deleted_at"],
        owner=owner,
    )


class SqlAlchemyTravelOrderRepository(TravelOrderRepository):
    """Persists travel orders in a relational database.

    Implements the TravelOrderRepository port defined in the domain layer.
    """

    def __init__(
        self,
        engine: Engine,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self._clock = clock

    def create(self, order: NewTravelOrder) -> TravelOrder:
        """Insert a travel order.

        Args:
            order: Validated order data, requester already resolved.

        Returns:
            The stored order with its identity, timestamps and owner profile.

        Raises:
            TravelOrderStorageError: If the insert fails.
        """
        now = self._clock()
        stmt = insert(travel_orders).values(
            user_id=order.requester_id,
            city=order.city,
            state=order.state,
            country=order.country,
            departure_date=order.departure_date,
            return_date=order.return_date,
            status=order.status.value,
            created_at=now,
            updated_at=now,
        )

        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
                order_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            logger.error("Travel order insert failed: %s", type(exc).__name__)
            raise TravelOrderStorageError("create", type(exc).__name__) from exc

        stored = self.find_by_id(order_id)
        if stored is None:
            raise TravelOrderStorageError("create", f"order {order_id} vanished after insert")
        return stored

    def find_by_id(
        self, order_id: int, include_deleted: bool = False
    ) -> Optional[TravelOrder]:
        stmt = _order_select().where(travel_orders.c.id == order_id)
        if not include_deleted:
            stmt = stmt.where(travel_orders.c.deleted_at.is_(None))

        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()

        return _row_to_order(row) if row is not None else None

    def find_by_id_with_status(
        self, order_id: int, status: TravelOrderStatus
    ) -> Optional[TravelOrder]:
        stmt = _order_select().where(
            travel_orders.c.id == order_id,
            travel_orders.c.status == status.value,
            travel_orders.c.deleted_at.is_(None),
        )

        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()

        return _row_to_order(row) if row is not None else None

    def list(self, criteria: TravelOrderCriteria) -> TravelOrderPage:
        """Return one page of orders matching the criteria.

        City and state combine with AND when both are present. The date
        bounds compare departure (>=) and return (<=) dates respectively.

        Args:
            criteria: Resolved scope, filters and paging.

        Returns:
            A TravelOrderPage ordered by id ascending.
        """
        filters = criteria.filters
        conditions = []

        if criteria.owner_id is not None:
            conditions.append(travel_orders.c.user_id == criteria.owner_id)
        if not criteria.include_deleted:
            conditions.append(travel_orders.c.deleted_at.is_(None))
        if filters.status is not None:
            conditions.append(travel_orders.c.status == filters.status.value)
        if filters.city is not None:
            conditions.append(travel_orders.c.city == filters.city)
        if filters.state is not None:
            conditions.append(travel_orders.c.state == filters.state)
        if filters.start_date is not None:
            conditions.append(travel_orders.c.departure_date >= filters.start_date)
        if filters.end_date is not None:
            conditions.append(travel_orders.c.return_date <= filters.end_date)

        count_stmt = select(func.count()).select_from(travel_orders).where(*conditions)
        page_stmt = (
            _order_select()
            .where(*conditions)
            .order_by(travel_orders.c.id)
            .limit(criteria.per_page)
            .offset((criteria.page - 1) * criteria.per_page)
        )

        with self._engine.connect() as conn:
            total = conn.execute(count_stmt).scalar_one()
            rows = conn.execute(page_stmt).fetchall()

        logger.debug(
            "Listed %d of %d travel orders (page=%d)", len(rows), total, criteria.page
        )
        return TravelOrderPage(
            items=[_row_to_order(row, with_email=False) for row in rows],
            page=criteria.page,
            per_page=criteria.per_page,
            total=total,
        )

    def update_status(
        self,
        order_id: int,
        expected: TravelOrderStatus,
        new: TravelOrderStatus,
    ) -> Optional[TravelOrder]:
        stmt = (
            update(travel_orders)
            .where(
                travel_orders.c.id == order_id,
                travel_orders.c.status == expected.value,
                travel_orders.c.deleted_at.is_(None),
            )
            .values(status=new.value, updated_at=self._clock())
        )

        try:
            with self._engine.begin() as conn:
                updated_rows = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            logger.error(
                "Status update failed for order %d: %s", order_id, type(exc).__name__
            )
            raise TravelOrderStorageError("update_status", type(exc).__name__) from exc

        if updated_rows == 0:
            return None
        # The write committed; a cancellation landing before this read
        # must not turn it into a miss.
        updated = self.find_by_id(order_id, include_deleted=True)
        if updated is None:
            raise TravelOrderStorageError(
                "update_status", f"order {order_id} vanished after update"
            )
        return updated

    def soft_delete(self, order_id: int, expected: TravelOrderStatus) -> bool:
        now = self._clock()
        stmt = (
            update(travel_orders)
            .where(
                travel_orders.c.id == order_id,
                travel_orders.c.status == expected.value,
                travel_orders.c.deleted_at.is_(None),
            )
            .values(
                status=TravelOrderStatus.CANCELLED.value,
                deleted_at=now,
                updated_at=now,
            )
        )

        try:
            with self._engine.begin() as conn:
                updated_rows = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            logger.error(
                "Soft delete failed for order %d: %s", order_id, type(exc).__name__
            )
            raise TravelOrderStorageError("soft_delete", type(exc).__name__) from exc

        return updated_rows == 1
