"""Django ORM implementation of the Product repository.

Error handling follows the Null Object pattern: methods return ``None``
or an empty list instead of raising; the Service Layer decides how to
translate a missing entity into a domain error.
"""

from __future__ import annotations

from typing import List, Optional, Sequence
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.products.dtos import ProductQuantityDTO
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name).first()

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id), name=entity.name)
        return entity

    def find_all_by_id(self, ids: Sequence[UUID]) -> List[Product]:
        """Fetch all products matching ``ids`` in a single query.

        Malformed IDs match nothing rather than raising.
        """
        valid_ids = []
        for raw in ids:
            try:
                valid_ids.append(raw if isinstance(raw, UUID) else UUID(str(raw)))
            except ValueError:
                logger.debug("product.invalid_id_skipped", product_id=str(raw))
        if not valid_ids:
            return []
        return list(Product.objects.filter(id__in=valid_ids))

    @transaction.atomic
    def update_quantity(self, updates: Sequence[ProductQuantityDTO]) -> None:
        """Write each absolute stock value, one UPDATE per product."""
        now = timezone.now()
        for update in updates:
            Product.objects.filter(id=update.id).update(
                quantity=update.quantity, updated_at=now
            )
        logger.info(
            "product.quantities_updated",
            products=[str(update.id) for update in updates],
        )
