"""Order repository interface.

Extends ``IRepository[Order]`` with aggregate creation: the order and
its line items are created together from plain data.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its line items.

        ``data`` must include ``customer`` and ``products`` (list of dicts
        with ``product_id``, ``quantity``, ``price``).  The returned order
        exposes the stored items through ``order_products``, each echoing
        ``product_id`` and ``quantity``.
        """
