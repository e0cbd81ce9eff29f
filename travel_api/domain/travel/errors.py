"""
Domain-specific errors for the travel bounded context.

All errors raised from the domain and application layers are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class TravelDomainError(Exception):
    """Base error for all travel domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidTravelOrderError(TravelDomainError):
    """Raised when a travel order violates a business rule on input."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(reason)
        self.field = field


class TravelOrderNotFoundError(TravelDomainError):
    """Raised when a travel order does not exist in the scope looked up."""

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Travel order not found: {order_id}")
        self.order_id = order_id


class PermissionDeniedError(TravelDomainError):
    """Raised when an actor lacks rights for an action on a travel order."""

    def __init__(self, action: str, message: str) -> None:
        super().__init__(message)
        self.action = action


class AlreadyAssessedError(PermissionDeniedError):
    """Raised when a status transition targets an order no longer Requested."""

    def __init__(self, order_id: int) -> None:
        super().__init__(
            "transition_status",
            "This travel order has already been assessed.",
        )
        self.order_id = order_id


class TravelOrderStorageError(TravelDomainError):
    """Raised when the storage layer fails to apply a mutation."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Storage failure during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
