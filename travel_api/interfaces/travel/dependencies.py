"""
Dependency injection for the travel bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the travel context.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from travel_api.application.travel.cancel_travel_order import CancelTravelOrderUseCase
from travel_api.application.travel.create_travel_order import CreateTravelOrderUseCase
from travel_api.application.travel.list_travel_orders import ListTravelOrdersUseCase
from travel_api.application.travel.show_travel_order import ShowTravelOrderUseCase
from travel_api.application.travel.transition_travel_order_status import (
    TransitionTravelOrderStatusUseCase,
)
from travel_api.core.config import settings
from travel_api.domain.travel.ports import LifecycleEventNotifier, TravelOrderRepository
from travel_api.infrastructure.travel.travel_order_repository import (
    SqlAlchemyTravelOrderRepository,
)

_notifier: LifecycleEventNotifier | None = None


@lru_cache(maxsize=1)
def get_db_engine() -> Engine:
    """Build (once) a SQLAlchemy engine from application settings."""
    dsn = settings.get_database_dsn()
    if dsn.startswith("sqlite"):
        return create_engine(
            dsn, connect_args={"check_same_thread": False}, pool_pre_ping=True
        )
    return create_engine(dsn, pool_pre_ping=True)


def set_lifecycle_notifier(notifier: LifecycleEventNotifier | None) -> None:
    """Install the process-wide notifier (done by the application lifespan)."""
    global _notifier
    _notifier = notifier


def get_lifecycle_notifier() -> LifecycleEventNotifier:
    """Return the process-wide notifier.

    Raises:
        RuntimeError: If the application has not installed a notifier.
    """
    if _notifier is None:
        raise RuntimeError("Lifecycle notifier is not configured")
    return _notifier


def get_travel_order_repository(
    engine: Engine = Depends(get_db_engine),
) -> TravelOrderRepository:
    return SqlAlchemyTravelOrderRepository(engine=engine)


def get_list_travel_orders_use_case(
    order_repo: TravelOrderRepository = Depends(get_travel_order_repository),
) -> ListTravelOrdersUseCase:
    """Build ListTravelOrdersUseCase with its infrastructure dependencies."""
    return ListTravelOrdersUseCase(
        order_repo=order_repo,
        default_per_page=settings.default_page_size,
        max_per_page=settings.max_page_size,
    )


def get_create_travel_order_use_case(
    order_repo: TravelOrderRepository = Depends(get_travel_order_repository),
) -> CreateTravelOrderUseCase:
    """Build CreateTravelOrderUseCase with its infrastructure dependencies."""
    return CreateTravelOrderUseCase(order_repo=order_repo)


def get_show_travel_order_use_case(
    order_repo: TravelOrderRepository = Depends(get_travel_order_repository),
) -> ShowTravelOrderUseCase:
    """Build ShowTravelOrderUseCase with its infrastructure dependencies."""
    return ShowTravelOrderUseCase(order_repo=order_repo)


def get_transition_travel_order_status_use_case(
    order_repo: TravelOrderRepository = Depends(get_travel_order_repository),
    notifier: LifecycleEventNotifier = Depends(get_lifecycle_notifier),
) -> TransitionTravelOrderStatusUseCase:
    """Build TransitionTravelOrderStatusUseCase with its infrastructure dependencies."""
    return TransitionTravelOrderStatusUseCase(order_repo=order_repo, notifier=notifier)


def get_cancel_travel_order_use_case(
    order_repo: TravelOrderRepository = Depends(get_travel_order_repository),
    notifier: LifecycleEventNotifier = Depends(get_lifecycle_notifier),
) -> CancelTravelOrderUseCase:
    """Build CancelTravelOrderUseCase with its infrastructure dependencies."""
    return CancelTravelOrderUseCase(order_repo=order_repo, notifier=notifier)
