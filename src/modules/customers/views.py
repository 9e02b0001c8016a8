"""Customer API views.

Exposes the customer use cases via HTTP using a DRF ViewSet.
Domain exceptions propagate to the project exception handler.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CreateCustomerSerializer, CustomerSerializer
from modules.customers.services import CreateCustomerService, FindCustomerService


class CustomerViewSet(ViewSet):
    """ViewSet for customer registration and look-up."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = CustomerDjangoRepository()
        self._create_customer = CreateCustomerService(customer_repository=repository)
        self._find_customer = FindCustomerService(customer_repository=repository)

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        serializer = CreateCustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = CreateCustomerDTO(**serializer.validated_data)
        customer = self._create_customer.execute(dto)

        return Response(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = self._find_customer.execute(pk)
        return Response(CustomerSerializer(customer).data)
