"""Customer service layer (Use Cases).

Business rules enforced here:
- Email must be unique across customers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CreateCustomerService:
    """Registers a new customer.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, customer_repository: ICustomerRepository) -> None:
        self._customer_repo = customer_repository

    @transaction.atomic
    def execute(self, dto: CreateCustomerDTO) -> Customer:
        """Create a customer after enforcing email uniqueness.

        Raises:
            CustomerAlreadyExists: the email is already registered.
        """
        if self._customer_repo.get_by_email(dto.email):
            logger.warning("customer.duplicate_email")
            raise CustomerAlreadyExists()

        customer = self._customer_repo.save(Customer(name=dto.name, email=dto.email))
        logger.info("customer.created", customer_id=str(customer.id))
        return customer


class FindCustomerService:
    def __init__(self, customer_repository: ICustomerRepository) -> None:
        self._customer_repo = customer_repository

    def execute(self, id: str) -> Customer:
        """Raises ``CustomerNotFound`` when no customer has this ID."""
        customer = self._customer_repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
