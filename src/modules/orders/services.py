"""Order service layer (Use Cases).

``CreateOrderService`` validates an order request against the customer
and product catalogs, stores the order with price snapshots and writes
the resulting stock levels back to the product catalog.

Business rules enforced:
- The customer must exist.
- Every requested product must exist.
- No requested quantity may exceed the product's stored stock.
- Line item prices are the stored product prices at creation time.

Stock is written back as absolute values computed from the stock read
during validation.  Nothing here locks products between that read and the
write, and the order insert and the stock write are two independent
writes: two concurrent orders for the same product can both pass
validation, and the later write wins.  Duplicate product IDs in one
request are checked and written line by line, without merging.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List
from uuid import UUID

import structlog

from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    NoProductsFound,
    OrderNotFound,
    ProductNotFound,
)
from modules.products.dtos import ProductQuantityDTO

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class CreateOrderService:
    """Application service for the order-creation use case.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._customer_repo = customer_repository

    def execute(self, dto: CreateOrderDTO) -> Order:
        """Create an order and decrement stock for every requested product.

        Steps:
        1. Resolve the customer.
        2. Fetch all requested products in one call.
        3. Reject unknown product IDs (first one in request order).
        4. Reject quantities above stock (first one in request order).
        5. Build line items priced from the stored products.
        6. Persist the order.
        7. Overwrite stock with ``stock read in step 2 - ordered quantity``.

        Raises:
            CustomerNotFound: the customer does not exist.
            NoProductsFound: none of the requested products exists.
            ProductNotFound: a requested product does not exist.
            InsufficientStock: a requested quantity exceeds stock.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info("order.creation_started", line_count=len(dto.products))

        # 1. Customer
        customer = self._customer_repo.get_by_id(str(dto.customer_id))
        if not customer:
            log.warning("order.customer_not_found")
            raise CustomerNotFound()

        # 2. Products, fetched once
        requested_ids = list(dict.fromkeys(line.product_id for line in dto.products))
        stored_products = self._product_repo.find_all_by_id(requested_ids)
        if not stored_products:
            log.warning("order.no_products_found")
            raise NoProductsFound()

        products_by_id = _index_by_id(stored_products)

        # 3. Existence
        for line in dto.products:
            if line.product_id not in products_by_id:
                log.warning("order.product_not_found", product_id=str(line.product_id))
                raise ProductNotFound(line.product_id)

        # 4. Stock
        for line in dto.products:
            available = products_by_id[line.product_id].quantity
            if line.quantity > available:
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(line.product_id),
                    requested=line.quantity,
                    available=available,
                )
                raise InsufficientStock(line.product_id)

        # 5. Line items with price snapshot
        line_items = [
            {
                "product_id": line.product_id,
                "quantity": line.quantity,
                "price": products_by_id[line.product_id].price,
            }
            for line in dto.products
        ]

        # 6. Persist
        order = self._order_repo.create({"customer": customer, "products": line_items})
        log = log.bind(order_id=str(order.id))

        # 7. Absolute stock overwrite
        updates = [
            ProductQuantityDTO(
                id=item.product_id,
                quantity=products_by_id[item.product_id].quantity - item.quantity,
            )
            for item in order.order_products.all()
        ]
        self._product_repo.update_quantity(updates)

        log.info("order.created", stock_updates=len(updates))
        return order


class FindOrderService:
    """Retrieves a single order with its line items."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def execute(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` if the order does not exist."""
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order


def _index_by_id(products: List[Product]) -> Dict[UUID, Product]:
    """Map product ID to record; the first record wins for repeated IDs."""
    index: Dict[UUID, Product] = {}
    for product in products:
        index.setdefault(product.id, product)
    return index
