"""Talentgate — Service Errors.

Failures raised by the workflow services. Each carries an HTTP-style
status code so a request layer can map it to a response directly.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for workflow failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """A referenced profile, application or record does not exist."""

    status_code = 404


class ValidationError(ServiceError):
    """Submitted input is malformed.

    Attributes:
        errors: Every problem found, not just the first.
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[list[str]] = None) -> None:
        self.errors = errors or [message]
        super().__init__(message)


class PermissionDeniedError(ServiceError):
    """The caller may not perform this action."""

    status_code = 403


class PickLimitError(PermissionDeniedError):
    """The talent already holds the maximum picks for their tier."""

    def __init__(self, max_picks: int, tier: str) -> None:
        self.max_picks = max_picks
        self.tier = tier
        super().__init__(
            f"You have reached your maximum concurrent picks ({max_picks}) for {tier} tier"
        )


class NotEligibleError(ServiceError):
    """The requested state change is not allowed by the current metrics."""

    status_code = 400
