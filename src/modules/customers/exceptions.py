"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import AppError


class CustomerAlreadyExists(AppError):
    """A customer with the same email already exists."""

    status_code = 409
    default_message = "Email address already used."


class CustomerNotFound(AppError):
    """The requested customer does not exist."""

    status_code = 404
    default_message = "Customer not found."
