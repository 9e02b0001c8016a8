"""Product API views.

Exposes the product use cases via HTTP using a DRF ViewSet.
Domain exceptions propagate to the project exception handler.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.dtos import CreateProductDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import CreateProductSerializer, ProductSerializer
from modules.products.services import CreateProductService, FindProductService


class ProductViewSet(ViewSet):
    """ViewSet for product registration and look-up."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = ProductDjangoRepository()
        self._create_product = CreateProductService(product_repository=repository)
        self._find_product = FindProductService(product_repository=repository)

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        serializer = CreateProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = CreateProductDTO(**serializer.validated_data)
        product = self._create_product.execute(dto)

        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._find_product.execute(pk)
        return Response(ProductSerializer(product).data)
