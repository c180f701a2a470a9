from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Caller supplied input that fails a business rule.

    ``field`` names the offending argument, ``reason`` is the human-readable
    message surfaced to HTTP clients unchanged.
    """

    def __init__(self, *, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class UserNotFoundError(LookupError):
    """Raised by the store when asked to update a record it does not hold.

    The service always checks existence first, so seeing this outside of
    store-level tests means something bypassed the service.
    """

    def __init__(self, user_id: int):
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id
