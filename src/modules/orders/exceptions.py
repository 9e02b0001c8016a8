"""Order domain exceptions.

Raised by the order use cases when a request cannot be fulfilled.
All of them are expected, non-retryable client errors; the message
names the offending ID where there is one.
"""

from __future__ import annotations

from uuid import UUID

from modules.core.exceptions import AppError


class CustomerNotFound(AppError):
    """The customer placing the order does not exist."""

    status_code = 404
    default_message = "Customer not found."


class NoProductsFound(AppError):
    """None of the requested product IDs exists."""

    status_code = 404
    default_message = "No products were found with the given IDs."


class ProductNotFound(AppError):
    """A requested product ID does not exist."""

    status_code = 404

    def __init__(self, product_id: UUID) -> None:
        self.product_id = product_id
        super().__init__(f"Could not find product with ID {product_id}.")


class InsufficientStock(AppError):
    """A requested quantity exceeds the product's stock."""

    status_code = 409

    def __init__(self, product_id: UUID) -> None:
        self.product_id = product_id
        super().__init__(
            f"The product with ID {product_id} doesn't have the requested "
            "quantity available."
        )


class OrderNotFound(AppError):
    """The requested order does not exist."""

    status_code = 404
    default_message = "Order not found."
