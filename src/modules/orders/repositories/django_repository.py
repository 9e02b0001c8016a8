"""Django ORM implementation of the Order repository.

``create`` persists the Order and its OrderProducts inside one
``transaction.atomic()`` block local to the aggregate; it does not
extend to writes made by other repositories.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.models import Order, OrderProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys:
        - ``customer`` (required): the ``Customer`` placing the order
        - ``products`` (required): list of dicts with ``product_id``,
          ``quantity``, ``price``
        """
        order = Order(customer=data["customer"])
        order.save()

        items = data.get("products", [])
        for item_data in items:
            OrderProduct(
                order=order,
                product_id=item_data["product_id"],
                quantity=item_data["quantity"],
                price=item_data["price"],
            ).save()

        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return self.get_by_id(str(order.id)) or order

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its customer and line items eager-loaded.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("customer")
                .prefetch_related("order_products")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity
