"""
FastAPI router for the travel bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from travel_api.application.travel.cancel_travel_order import CancelTravelOrderUseCase
from travel_api.application.travel.create_travel_order import CreateTravelOrderUseCase
from travel_api.application.travel.dtos import (
    CancelTravelOrderCommand,
    CreateTravelOrderCommand,
    ListTravelOrdersQuery,
    ShowTravelOrderQuery,
    TransitionTravelOrderStatusCommand,
    TravelOrderPageResult,
    TravelOrderResult,
)
from travel_api.application.travel.list_travel_orders import ListTravelOrdersUseCase
from travel_api.application.travel.show_travel_order import ShowTravelOrderUseCase
from travel_api.application.travel.transition_travel_order_status import (
    TransitionTravelOrderStatusUseCase,
)
from travel_api.domain.travel.entities import Actor, TravelOrderStatus
from travel_api.interfaces.travel.dependencies import (
    get_cancel_travel_order_use_case,
    get_create_travel_order_use_case,
    get_list_travel_orders_use_case,
    get_show_travel_order_use_case,
    get_transition_travel_order_status_use_case,
)
from travel_api.interfaces.travel.schemas import (
    CreateTravelOrderRequest,
    ErrorResponse,
    OwnerSchema,
    TravelOrderListResponse,
    TravelOrderResponse,
    UpdateTravelOrderStatusRequest,
)
from travel_api.shared.security.auth import get_current_actor

router = APIRouter(prefix="/travel-orders", tags=["travel-orders"])

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _to_response(result: TravelOrderResult) -> TravelOrderResponse:
    owner = None
    if result.owner is not None:
        owner = OwnerSchema(
            id=result.owner.id,
            name=result.owner.name,
            email=result.owner.email,
        )
    return TravelOrderResponse(
        id=result.id,
        user_id=result.requester_id,
        city=result.city,
        state=result.state,
        country=result.country,
        departure_date=result.departure_date,
        return_date=result.return_date,
        status=result.status,
        created_at=result.created_at,
        updated_at=result.updated_at,
        deleted_at=result.deleted_at,
        owner=owner,
    )


def _page_url(request: Request, filters: dict[str, str], page: int) -> str:
    url = request.url.replace(query="").include_query_params(**filters, page=page)
    return str(url)


def _to_list_response(
    request: Request, result: TravelOrderPageResult
) -> TravelOrderListResponse:
    filters = result.applied_filters
    current = result.current_page
    return TravelOrderListResponse(
        data=[_to_response(item) for item in result.items],
        current_page=current,
        per_page=result.per_page,
        last_page=result.last_page,
        total=result.total,
        path=str(request.url.replace(query="")),
        first_page_url=_page_url(request, filters, 1),
        last_page_url=_page_url(request, filters, result.last_page),
        next_page_url=(
            _page_url(request, filters, current + 1)
            if current < result.last_page
            else None
        ),
        prev_page_url=_page_url(request, filters, current - 1) if current > 1 else None,
        filters=filters,
    )


@router.get(
    "",
    response_model=TravelOrderListResponse,
    responses=ERROR_RESPONSES,
    summary="List travel orders",
    description=(
        "List travel orders visible to the caller. Admins see every order, "
        "users only their own. Filters combine with AND."
    ),
)
def list_travel_orders(
    request: Request,
    status: Optional[TravelOrderStatus] = Query(default=None),
    city: Optional[str] = Query(default=None, min_length=1),
    state: Optional[str] = Query(default=None, min_length=1),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    per_page: Optional[int] = Query(default=None, alias="perPage"),
    page: int = Query(default=1),
    actor: Actor = Depends(get_current_actor),
    use_case: ListTravelOrdersUseCase = Depends(get_list_travel_orders_use_case),
) -> TravelOrderListResponse:
    """Return one page of travel orders."""
    query = ListTravelOrdersQuery(
        actor=actor,
        status=status,
        city=city,
        state=state,
        start_date=start_date,
        end_date=end_date,
        per_page=per_page,
        page=page,
    )
    return _to_list_response(request, use_case.execute(query))


@router.post(
    "",
    response_model=TravelOrderResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
    summary="Request a trip",
    description="Create a travel order for the caller. It starts as Requested.",
)
def create_travel_order(
    body: CreateTravelOrderRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateTravelOrderUseCase = Depends(get_create_travel_order_use_case),
) -> TravelOrderResponse:
    """Create a travel order owned by the caller."""
    command = CreateTravelOrderCommand(
        actor=actor,
        city=body.city,
        state=body.state,
        country=body.country,
        departure_date=body.departure_date,
        return_date=body.return_date,
    )
    return _to_response(use_case.execute(command))


@router.get(
    "/{order_id}",
    response_model=TravelOrderResponse,
    responses=ERROR_RESPONSES,
    summary="Show a travel order",
)
def show_travel_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    use_case: ShowTravelOrderUseCase = Depends(get_show_travel_order_use_case),
) -> TravelOrderResponse:
    """Return a single travel order, cancelled ones included."""
    return _to_response(use_case.execute(ShowTravelOrderQuery(actor=actor, order_id=order_id)))


@router.patch(
    "/{order_id}",
    response_model=TravelOrderResponse,
    responses=ERROR_RESPONSES,
    summary="Assess a travel order",
    description="Approve or cancel a Requested order. Admins only, never their own.",
)
def update_travel_order_status(
    order_id: int,
    body: UpdateTravelOrderStatusRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: TransitionTravelOrderStatusUseCase = Depends(
        get_transition_travel_order_status_use_case
    ),
) -> TravelOrderResponse:
    """Apply an admin decision to a Requested order."""
    command = TransitionTravelOrderStatusCommand(
        actor=actor,
        order_id=order_id,
        status=TravelOrderStatus(body.status),
    )
    return _to_response(use_case.execute(command))


@router.delete(
    "/{order_id}",
    status_code=204,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Cancel an approved travel order",
    description="The requester cancels one of their Approved orders.",
)
def cancel_travel_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    use_case: CancelTravelOrderUseCase = Depends(get_cancel_travel_order_use_case),
) -> Response:
    """Soft-delete an Approved order owned by the caller."""
    use_case.execute(CancelTravelOrderCommand(actor=actor, order_id=order_id))
    return Response(status_code=204)
