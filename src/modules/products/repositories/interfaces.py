"""Product repository interface.

Extends ``IRepository[Product]`` with the batch look-up and batch stock
overwrite used by order creation, and the name look-up used by the
uniqueness rule on product registration.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.dtos import ProductQuantityDTO
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its (unique) name."""

    @abstractmethod
    def find_all_by_id(self, ids: Sequence[UUID]) -> List[Product]:
        """Return every product whose ID is in ``ids``.

        Unknown IDs are silently dropped; the result may be shorter than
        ``ids`` or empty.  No ordering is guaranteed.
        """

    @abstractmethod
    def update_quantity(self, updates: Sequence[ProductQuantityDTO]) -> None:
        """Overwrite the stock of each listed product with ``quantity``.

        Values are absolute replacements, not deltas.
        """
