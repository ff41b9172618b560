"""
Centralized error types for the booking core.

Input errors and not-found are raised to the caller; store errors are raised from the
store boundary and swallowed per sub-operation by the scheduler jobs.
"""
from __future__ import annotations


class BookingError(Exception):
    """Base class for every error raised by the booking core."""


class InvalidInputError(BookingError):
    """Malformed date/time string, missing field, or an empty availability window."""


class NotFoundError(BookingError):
    """Unknown session or user id. Never used for store failures."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(BookingError):
    """Session action not allowed from the current status."""


class StoreError(BookingError):
    """Store timeout, connection failure or rejected statement."""
