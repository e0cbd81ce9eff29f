"""
Use case: List travel orders visible to the caller.

Input: ListTravelOrdersQuery (actor, optional filters, paging)
Output: TravelOrderPageResult
Side effects: None (read-only query).
Failure cases: PermissionDeniedError, InvalidTravelOrderError.
"""

import logging

from travel_api.application.travel.dtos import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    ListTravelOrdersQuery,
    TravelOrderPageResult,
)
from travel_api.application.travel.mappers import to_travel_order_result
from travel_api.domain.travel import policy
from travel_api.domain.travel.entities import TravelOrderCriteria, TravelOrderFilters
from travel_api.domain.travel.errors import InvalidTravelOrderError, PermissionDeniedError
from travel_api.domain.travel.ports import TravelOrderRepository

logger = logging.getLogger(__name__)


class ListTravelOrdersUseCase:
    """Orchestrates a scoped, filtered and paginated listing.

    The actor's scopes decide whether the listing is restricted to
    their own orders and whether soft-deleted orders are included.
    Caller filters are applied on top of that scope.
    """

    def __init__(
        self,
        order_repo: TravelOrderRepository,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ) -> None:
        self._order_repo = order_repo
        self._default_per_page = default_per_page
        self._max_per_page = max_per_page

    def execute(self, query: ListTravelOrdersQuery) -> TravelOrderPageResult:
        """Run the listing use case.

        Args:
            query: Actor, filters and paging parameters.

        Returns:
            One page of orders plus the echo of applied filters.

        Raises:
            PermissionDeniedError: If the actor holds no listing scope.
            InvalidTravelOrderError: If paging parameters are out of range.
        """
        actor = query.actor
        if not policy.can_list(actor):
            raise PermissionDeniedError(
                "list", "You are not permitted to list travel orders."
            )

        per_page = query.per_page if query.per_page is not None else self._default_per_page
        if not 1 <= per_page <= self._max_per_page:
            raise InvalidTravelOrderError(
                "perPage", f"The page size must be between 1 and {self._max_per_page}."
            )
        if query.page < 1:
            raise InvalidTravelOrderError("page", "The page must be at least 1.")

        filters = TravelOrderFilters(
            status=query.status,
            city=query.city,
            state=query.state,
            start_date=query.start_date,
            end_date=query.end_date,
        )
        scope = policy.listing_scope(actor, filtering_by_status=query.status is not None)

        logger.info(
            "Listing travel orders: actor=%d, owner_scope=%s, include_deleted=%s, page=%d",
            actor.id,
            scope.owner_id,
            scope.include_deleted,
            query.page,
        )

        page = self._order_repo.list(
            TravelOrderCriteria(
                filters=filters,
                page=query.page,
                per_page=per_page,
                owner_id=scope.owner_id,
                include_deleted=scope.include_deleted,
            )
        )

        return TravelOrderPageResult(
            items=[to_travel_order_result(order) for order in page.items],
            current_page=page.page,
            per_page=page.per_page,
            last_page=page.last_page,
            total=page.total,
            applied_filters=_applied_filters(query),
        )


def _applied_filters(query: ListTravelOrdersQuery) -> dict[str, str]:
    """Echo the caller-supplied parameters under their query names."""
    echo: dict[str, str] = {}
    if query.per_page is not None:
        echo["perPage"] = str(query.per_page)
    if query.status is not None:
        echo["status"] = query.status.value
    if query.city is not None:
        echo["city"] = query.city
    if query.state is not None:
        echo["state"] = query.state
    if query.start_date is not None:
        echo["startDate"] = query.start_date.isoformat()
    if query.end_date is not None:
        echo["endDate"] = query.end_date.isoformat()
    return echo
