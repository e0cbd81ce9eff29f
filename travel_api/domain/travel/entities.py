"""
Domain entities for the travel bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TravelOrderStatus(Enum):
    """Lifecycle status of a travel order."""

    REQUESTED = "Requested"
    APPROVED = "Approved"
    CANCELLED = "Cancelled"


class Role(Enum):
    """Account role of an actor. Informational only; scopes drive access."""

    USER = "user"
    ADMIN = "admin"


class Scope(Enum):
    """Permission scope granted to an authenticated actor's token."""

    USER = "user-permission"
    ADMIN = "admin-permission"


class LifecycleEventKind(Enum):
    """Kind of lifecycle event emitted after a status change."""

    APPROVED = "approved"
    DISAPPROVED = "disapproved"


@dataclass(frozen=True)
class Actor:
    """An authenticated caller.

    Role and scopes are independent: an account with role ``admin``
    may hold a token granting only ``user-permission``.
    """

    id: int
    role: Role
    scopes: frozenset[Scope] = field(default_factory=frozenset)

    def has_scope(self, scope: Scope) -> bool:
        return scope in self.scopes


@dataclass(frozen=True)
class OwnerProfile:
    """Public profile of the user who requested a travel order."""

    id: int
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class TravelOrder:
    """A request for a business trip."""

    id: int
    requester_id: int
    city: str
    state: str
    country: str
    departure_date: date
    return_date: date
    status: TravelOrderStatus = TravelOrderStatus.REQUESTED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    owner: Optional[OwnerProfile] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class NewTravelOrder:
    """Data required to persist a travel order that has no identity yet."""

    requester_id: int
    city: str
    state: str
    country: str
    departure_date: date
    return_date: date
    status: TravelOrderStatus = TravelOrderStatus.REQUESTED


@dataclass(frozen=True)
class TravelOrderFilters:
    """Optional criteria narrowing a travel order listing.

    Attributes:
        status: Exact status match.
        city: Exact city match.
        state: Exact state/region match. Combined with city using AND.
        start_date: Lower bound (inclusive) on the departure date.
        end_date: Upper bound (inclusive) on the return date.
    """

    status: Optional[TravelOrderStatus] = None
    city: Optional[str] = None
    state: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class TravelOrderCriteria:
    """Fully resolved listing query handed to the repository.

    ``owner_id`` restricts results to one requester when set.
    """

    filters: TravelOrderFilters
    page: int
    per_page: int
    owner_id: Optional[int] = None
    include_deleted: bool = False


@dataclass(frozen=True)
class TravelOrderPage:
    """One page of a travel order listing."""

    items: list[TravelOrder]
    page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.per_page - 1) // self.per_page


@dataclass(frozen=True)
class LifecycleEvent:
    """A status change that downstream notification channels react to."""

    kind: LifecycleEventKind
    order: TravelOrder
    owner: Optional[OwnerProfile]
    occurred_at: datetime
