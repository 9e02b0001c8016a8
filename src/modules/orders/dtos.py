"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderProductDTO``: one requested product/quantity pair.
- ``CreateOrderDTO``: input for order creation.

``products`` keeps request order and is neither de-duplicated nor
required to be non-empty: ``CreateOrderService`` reports an empty
request as ``NoProductsFound``.
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class CreateOrderProductDTO(BaseModel):
    """Immutable DTO for one requested line.

    ``price`` is not accepted from the client; it is read from the
    product catalog when the order is created.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    products: List[CreateOrderProductDTO]
