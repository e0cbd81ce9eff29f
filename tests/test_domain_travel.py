"""
Tests for the travel domain layer.

Covers the authorization policy, lifecycle rules, notification
rendering and error hierarchy. Pure domain objects only.
"""

from datetime import date, datetime, timezone

import pytest

from travel_api.domain.travel import policy
from travel_api.domain.travel.entities import (
    Actor,
    LifecycleEvent,
    LifecycleEventKind,
    NewTravelOrder,
    OwnerProfile,
    Role,
    Scope,
    TravelOrder,
    TravelOrderPage,
    TravelOrderStatus,
)
from travel_api.domain.travel.errors import (
    AlreadyAssessedError,
    InvalidTravelOrderError,
    PermissionDeniedError,
    TravelDomainError,
    TravelOrderNotFoundError,
)
from travel_api.domain.travel.lifecycle import (
    ensure_assessment_target,
    event_kind_for,
    is_assessable,
    is_cancellable,
    validate_new_order,
)
from travel_api.domain.travel.notifications import (
    event_to_dict,
    format_display_date,
    render_mail,
)

TODAY = date(2025, 1, 1)


def _actor(actor_id: int, role: Role, *scopes: Scope) -> Actor:
    return Actor(id=actor_id, role=role, scopes=frozenset(scopes))


def _order(
    requester_id: int = 1,
    status: TravelOrderStatus = TravelOrderStatus.REQUESTED,
    deleted: bool = False,
) -> TravelOrder:
    return TravelOrder(
        id=10,
        requester_id=requester_id,
        city="Belo Horizonte",
        state="Minas Gerais",
        country="Brasil",
        departure_date=date(2025, 1, 11),
        return_date=date(2025, 1, 16),
        status=status,
        deleted_at=datetime(2025, 1, 5, tzinfo=timezone.utc) if deleted else None,
    )


def _new_order(**overrides) -> NewTravelOrder:
    data = {
        "requester_id": 1,
        "city": "Belo Horizonte",
        "state": "Minas Gerais",
        "country": "Brasil",
        "departure_date": date(2025, 1, 11),
        "return_date": date(2025, 1, 16),
    }
    data.update(overrides)
    return NewTravelOrder(**data)


USER = _actor(1, Role.USER, Scope.USER)
OTHER_USER = _actor(2, Role.USER, Scope.USER)
ADMIN = _actor(3, Role.ADMIN, Scope.ADMIN)
NO_SCOPES = _actor(4, Role.USER)


# ══════════════════════════════════════════════════════════════════════
# Policy
# ══════════════════════════════════════════════════════════════════════


class TestCreateAndListPolicy:
    """Tests for who may create and list orders."""

    def test_user_scope_can_create(self):
        assert policy.can_create(USER)

    def test_admin_scope_alone_cannot_create(self):
        assert not policy.can_create(ADMIN)

    def test_admin_role_with_user_scope_can_create(self):
        actor = _actor(5, Role.ADMIN, Scope.USER)
        assert policy.can_create(actor)

    def test_listing_requires_some_scope(self):
        assert policy.can_list(USER)
        assert policy.can_list(ADMIN)
        assert not policy.can_list(NO_SCOPES)


class TestListingScope:
    """Tests for how listings are narrowed per actor."""

    def test_admin_sees_everything_including_deleted(self):
        scope = policy.listing_scope(ADMIN)
        assert scope.owner_id is None
        assert scope.include_deleted is True

    def test_user_sees_own_active_orders(self):
        scope = policy.listing_scope(USER)
        assert scope.owner_id == USER.id
        assert scope.include_deleted is False

    def test_user_status_filter_includes_deleted(self):
        scope = policy.listing_scope(USER, filtering_by_status=True)
        assert scope.owner_id == USER.id
        assert scope.include_deleted is True

    def test_scope_not_role_decides(self):
        actor = _actor(6, Role.ADMIN, Scope.USER)
        assert policy.listing_scope(actor).owner_id == 6


class TestViewPolicy:
    """Tests for single-order visibility."""

    def test_owner_can_view(self):
        assert policy.can_view(USER, _order(requester_id=USER.id))

    def test_other_user_cannot_view(self):
        assert not policy.can_view(OTHER_USER, _order(requester_id=USER.id))

    def test_admin_can_view_any(self):
        assert policy.can_view(ADMIN, _order(requester_id=USER.id))

    def test_no_scope_cannot_view_even_own(self):
        assert not policy.can_view(NO_SCOPES, _order(requester_id=NO_SCOPES.id))


class TestTransitionPolicy:
    """Tests for admin assessment rights."""

    def test_admin_can_assess_others_order(self):
        assert policy.can_transition_status(ADMIN, _order(requester_id=USER.id))

    def test_admin_cannot_assess_own_order(self):
        assert not policy.can_transition_status(ADMIN, _order(requester_id=ADMIN.id))

    def test_user_cannot_assess(self):
        assert not policy.can_transition_status(USER, _order(requester_id=OTHER_USER.id))

    def test_admin_role_without_admin_scope_cannot_assess(self):
        actor = _actor(7, Role.ADMIN, Scope.USER)
        assert not policy.can_transition_status(actor, _order(requester_id=USER.id))

    def test_user_role_with_admin_scope_can_assess(self):
        actor = _actor(8, Role.USER, Scope.ADMIN)
        assert policy.can_transition_status(actor, _order(requester_id=USER.id))


class TestCancelPolicy:
    """Tests for owner cancellation rights."""

    def test_owner_can_cancel(self):
        assert policy.can_cancel(USER, _order(requester_id=USER.id))

    def test_non_owner_cannot_cancel(self):
        assert not policy.can_cancel(OTHER_USER, _order(requester_id=USER.id))

    def test_admin_scope_cannot_cancel_own_order(self):
        actor = _actor(9, Role.ADMIN, Scope.USER, Scope.ADMIN)
        assert not policy.can_cancel(actor, _order(requester_id=9))

    def test_admin_cannot_cancel_others_order(self):
        assert not policy.can_cancel(ADMIN, _order(requester_id=USER.id))


# ══════════════════════════════════════════════════════════════════════
# Lifecycle
# ══════════════════════════════════════════════════════════════════════


class TestStateMachine:
    """Tests for status predicates and transition targets."""

    def test_requested_is_assessable(self):
        assert is_assessable(_order())

    @pytest.mark.parametrize(
        "status", [TravelOrderStatus.APPROVED, TravelOrderStatus.CANCELLED]
    )
    def test_assessed_orders_are_terminal(self, status):
        assert not is_assessable(_order(status=status))

    def test_deleted_order_is_not_assessable(self):
        assert not is_assessable(_order(deleted=True))

    def test_only_active_approved_is_cancellable(self):
        assert is_cancellable(_order(status=TravelOrderStatus.APPROVED))
        assert not is_cancellable(_order(status=TravelOrderStatus.REQUESTED))
        assert not is_cancellable(
            _order(status=TravelOrderStatus.APPROVED, deleted=True)
        )

    def test_requested_is_not_a_valid_target(self):
        with pytest.raises(InvalidTravelOrderError) as exc_info:
            ensure_assessment_target(TravelOrderStatus.REQUESTED)
        assert exc_info.value.field == "status"

    def test_event_kind_follows_target(self):
        assert event_kind_for(TravelOrderStatus.APPROVED) is LifecycleEventKind.APPROVED
        assert (
            event_kind_for(TravelOrderStatus.CANCELLED)
            is LifecycleEventKind.DISAPPROVED
        )


class TestCreationInvariants:
    """Tests for validate_new_order."""

    def test_valid_order_passes(self):
        validate_new_order(_new_order(), today=TODAY)

    def test_same_day_return_is_allowed(self):
        validate_new_order(
            _new_order(departure_date=date(2025, 1, 2), return_date=date(2025, 1, 2)),
            today=TODAY,
        )

    def test_departure_today_rejected(self):
        with pytest.raises(InvalidTravelOrderError) as exc_info:
            validate_new_order(_new_order(departure_date=TODAY), today=TODAY)
        assert exc_info.value.field == "departure_date"

    def test_return_before_departure_rejected(self):
        with pytest.raises(InvalidTravelOrderError) as exc_info:
            validate_new_order(
                _new_order(return_date=date(2025, 1, 10)), today=TODAY
            )
        assert exc_info.value.field == "return_date"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("city", "X"),
            ("city", "x" * 71),
            ("state", "x" * 51),
            ("country", " B "),
            ("country", "x" * 61),
        ],
    )
    def test_length_limits(self, field, value):
        with pytest.raises(InvalidTravelOrderError) as exc_info:
            validate_new_order(_new_order(**{field: value}), today=TODAY)
        assert exc_info.value.field == field


class TestTravelOrderPage:
    """Tests for page arithmetic."""

    def test_empty_listing_has_one_page(self):
        assert TravelOrderPage(items=[], page=1, per_page=20, total=0).last_page == 1

    def test_partial_last_page_counts(self):
        assert TravelOrderPage(items=[], page=1, per_page=20, total=21).last_page == 2

    def test_exact_multiple(self):
        assert TravelOrderPage(items=[], page=1, per_page=5, total=15).last_page == 3


# ══════════════════════════════════════════════════════════════════════
# Notifications
# ══════════════════════════════════════════════════════════════════════


def _event(kind: LifecycleEventKind, owner: OwnerProfile | None) -> LifecycleEvent:
    status = (
        TravelOrderStatus.APPROVED
        if kind is LifecycleEventKind.APPROVED
        else TravelOrderStatus.CANCELLED
    )
    return LifecycleEvent(
        kind=kind,
        order=_order(status=status),
        owner=owner,
        occurred_at=datetime(2025, 1, 2, 9, 30, tzinfo=timezone.utc),
    )


class TestMailRendering:
    """Tests for render_mail."""

    def test_approved_mail(self):
        mail = render_mail(
            _event(LifecycleEventKind.APPROVED, OwnerProfile(1, "Alice", "a@x.com"))
        )
        assert mail.subject == "Update on your travel order"
        assert mail.greeting == "Hello Alice, we have great news for you!"
        assert mail.lines == [
            "Your travel order to Belo Horizonte - Minas Gerais, Brasil has been approved.",
            "Departing on: 11/01/2025",
            "Returning on: 16/01/2025",
        ]

    def test_disapproved_mail(self):
        mail = render_mail(
            _event(LifecycleEventKind.DISAPPROVED, OwnerProfile(1, "Alice"))
        )
        assert mail.subject == "Travel order cancellation"
        assert mail.greeting == "Hello Alice"
        assert mail.lines[0].endswith("has been cancelled.")

    def test_missing_owner_uses_generic_name(self):
        mail = render_mail(_event(LifecycleEventKind.APPROVED, None))
        assert mail.greeting.startswith("Hello traveler")

    def test_display_date_format(self):
        assert format_display_date(date(2025, 3, 7)) == "07/03/2025"


class TestEventSerialization:
    """Tests for event_to_dict."""

    def test_payload_shape(self):
        payload = event_to_dict(
            _event(LifecycleEventKind.APPROVED, OwnerProfile(1, "Alice", "a@x.com"))
        )
        assert payload["event"] == "travel_order.approved"
        assert payload["occurred_at"] == "2025-01-02T09:30:00+00:00"
        assert payload["order"]["status"] == "Approved"
        assert payload["order"]["departure_date"] == "2025-01-11"
        assert payload["owner"] == {"id": 1, "name": "Alice", "email": "a@x.com"}
        assert payload["mail"]["subject"] == "Update on your travel order"

    def test_payload_without_owner(self):
        payload = event_to_dict(_event(LifecycleEventKind.DISAPPROVED, None))
        assert payload["event"] == "travel_order.disapproved"
        assert payload["owner"] is None


# ══════════════════════════════════════════════════════════════════════
# Errors
# ══════════════════════════════════════════════════════════════════════


class TestErrors:
    """Tests for the error hierarchy."""

    def test_already_assessed_is_a_permission_error(self):
        exc = AlreadyAssessedError(10)
        assert isinstance(exc, PermissionDeniedError)
        assert isinstance(exc, TravelDomainError)
        assert exc.action == "transition_status"
        assert exc.message == "This travel order has already been assessed."

    def test_not_found_message(self):
        exc = TravelOrderNotFoundError(42)
        assert exc.order_id == 42
        assert "42" in str(exc)
