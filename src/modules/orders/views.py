"""Order API views.

Exposes the order use cases via HTTP using a DRF ViewSet.
Domain exceptions (``AppError`` subclasses) propagate to the project
exception handler, which renders them with their status code.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import ViewSet

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderProductDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import CreateOrderSerializer, OrderSerializer
from modules.orders.services import CreateOrderService, FindOrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(ViewSet):
    """ViewSet for order creation and look-up.

    Uses the order services with injected repositories (DIP); all ORM
    access goes through the repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        order_repository = OrderDjangoRepository()
        self._create_order = CreateOrderService(
            order_repository=order_repository,
            product_repository=ProductDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )
        self._find_order = FindOrderService(order_repository=order_repository)

    def get_throttles(self) -> list[BaseThrottle]:
        """Scope order creation to its own throttle rate."""
        self.throttle_scope = "order_creation" if self.action == "create" else None
        return super().get_throttles()

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = CreateOrderDTO(
            customer_id=data["customer_id"],
            products=[
                CreateOrderProductDTO(
                    product_id=product["id"],
                    quantity=product["quantity"],
                )
                for product in data["products"]
            ],
        )
        order = self._create_order.execute(dto)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._find_order.execute(pk)
        return Response(OrderSerializer(order).data)
