"""Product service layer (Use Cases).

Business rules enforced here:
- Product name must be unique.
- Price must be greater than zero (validated by DTO).
- Stock cannot be negative (validated by DTO).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class CreateProductService:
    """Registers a new product with its price and initial stock.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, product_repository: IProductRepository) -> None:
        self._product_repo = product_repository

    @transaction.atomic
    def execute(self, dto: CreateProductDTO) -> Product:
        """Create a product after enforcing name uniqueness.

        Raises:
            ProductAlreadyExists: the name is already taken.
        """
        log = logger.bind(name=dto.name)

        if self._product_repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product '{dto.name}' already registered.")

        product = self._product_repo.save(
            Product(name=dto.name, price=dto.price, quantity=dto.quantity)
        )
        log.info("product.created", product_id=str(product.id))
        return product


class FindProductService:
    def __init__(self, product_repository: IProductRepository) -> None:
        self._product_repo = product_repository

    def execute(self, id: str) -> Product:
        """Raises ``ProductNotFound`` when no product has this ID."""
        product = self._product_repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
