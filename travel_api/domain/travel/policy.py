"""
Domain service: Travel order authorization policy.

Pure decision functions over an actor and, where relevant, a target order.
Decisions are driven by granted scopes, never by the actor's role.
No framework imports. No IO. No side effects.
"""

from dataclasses import dataclass
from typing import Optional

from travel_api.domain.travel.entities import Actor, Scope, TravelOrder


@dataclass(frozen=True)
class ListingScope:
    """Shape a listing takes for a given actor.

    Attributes:
        owner_id: Restrict results to this requester, or None for all.
        include_deleted: Whether soft-deleted orders are part of the set.
    """

    owner_id: Optional[int]
    include_deleted: bool


def is_owner(actor: Actor, order: TravelOrder) -> bool:
    return order.requester_id == actor.id


def can_create(actor: Actor) -> bool:
    """Only user-scope tokens may request trips; admin scope alone is not enough."""
    return actor.has_scope(Scope.USER)


def can_list(actor: Actor) -> bool:
    return actor.has_scope(Scope.USER) or actor.has_scope(Scope.ADMIN)


def listing_scope(actor: Actor, filtering_by_status: bool = False) -> ListingScope:
    """Resolve how a listing is narrowed for the actor.

    Admin scope sees every requester including soft-deleted orders.
    User scope sees only its own orders; soft-deleted ones are included
    only when the caller filters by status explicitly.

    Args:
        actor: The caller. Must satisfy ``can_list``.
        filtering_by_status: Whether the listing carries a status filter.
    """
    if actor.has_scope(Scope.ADMIN):
        return ListingScope(owner_id=None, include_deleted=True)
    return ListingScope(owner_id=actor.id, include_deleted=filtering_by_status)


def can_view(actor: Actor, order: TravelOrder) -> bool:
    if actor.has_scope(Scope.ADMIN):
        return True
    if actor.has_scope(Scope.USER):
        return is_owner(actor, order)
    return False


def can_transition_status(actor: Actor, order: TravelOrder) -> bool:
    """Admin scope is required and an admin may not assess their own order."""
    return actor.has_scope(Scope.ADMIN) and not is_owner(actor, order)


def can_cancel(actor: Actor, order: TravelOrder) -> bool:
    """Cancellation is reserved to the owner holding user scope.

    Any token carrying admin scope is refused, even for its own orders.
    """
    if actor.has_scope(Scope.ADMIN):
        return False
    return actor.has_scope(Scope.USER) and is_owner(actor, order)
