"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import AppError


class ProductAlreadyExists(AppError):
    """A product with the same name already exists."""

    status_code = 409
    default_message = "A product with this name already exists."


class ProductNotFound(AppError):
    """The requested product does not exist."""

    status_code = 404
    default_message = "Product not found."
