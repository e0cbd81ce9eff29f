"""
Domain service: Lifecycle notification messages.

Renders the mail message a requester receives when their travel order
is approved or cancelled, and the JSON payload delivered to
notification channels. Pure functions; delivery lives in infrastructure.
"""

from dataclasses import dataclass, field
from datetime import date

from travel_api.domain.travel.entities import (
    LifecycleEvent,
    LifecycleEventKind,
    OwnerProfile,
    TravelOrder,
)

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class MailMessage:
    """A rendered mail notification."""

    subject: str
    greeting: str
    lines: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "greeting": self.greeting,
            "lines": list(self.lines),
        }


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def _destination(order: TravelOrder) -> str:
    return f"{order.city} - {order.state}, {order.country}"


def render_mail(event: LifecycleEvent) -> MailMessage:
    """Build the mail message for a lifecycle event."""
    order = event.order
    name = event.owner.name if event.owner else "traveler"
    date_lines = [
        f"Departing on: {format_display_date(order.departure_date)}",
        f"Returning on: {format_display_date(order.return_date)}",
    ]

    if event.kind is LifecycleEventKind.APPROVED:
        return MailMessage(
            subject="Update on your travel order",
            greeting=f"Hello {name}, we have great news for you!",
            lines=[
                f"Your travel order to {_destination(order)} has been approved.",
                *date_lines,
            ],
        )

    return MailMessage(
        subject="Travel order cancellation",
        greeting=f"Hello {name}",
        lines=[
            f"Your travel order to {_destination(order)} has been cancelled.",
            *date_lines,
        ],
    )


def _owner_to_dict(owner: OwnerProfile | None) -> dict | None:
    if owner is None:
        return None
    return {"id": owner.id, "name": owner.name, "email": owner.email}


def event_to_dict(event: LifecycleEvent) -> dict:
    """Serialize a LifecycleEvent for JSON transport."""
    order = event.order
    return {
        "event": f"travel_order.{event.kind.value}",
        "occurred_at": event.occurred_at.isoformat(),
        "order": {
            "id": order.id,
            "requester_id": order.requester_id,
            "city": order.city,
            "state": order.state,
            "country": order.country,
            "departure_date": order.departure_date.isoformat(),
            "return_date": order.return_date.isoformat(),
            "status": order.status.value,
        },
        "owner": _owner_to_dict(event.owner),
        "mail": render_mail(event).to_dict(),
    }
