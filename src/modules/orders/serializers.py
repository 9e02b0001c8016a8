"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.serializers import CustomerSerializer
from modules.orders.models import Order, OrderProduct

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderProductSerializer(serializers.Serializer):
    """Validates a single requested product in an order creation request."""

    id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload.

    An empty ``products`` list is accepted here and rejected by the
    use case as ``NoProductsFound``.
    """

    customer_id = serializers.UUIDField()
    products = CreateOrderProductSerializer(many=True, allow_empty=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderProduct
        fields = ["id", "product_id", "price", "quantity", "created_at"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with customer and line items."""

    customer = CustomerSerializer(read_only=True)
    order_products = OrderProductSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "order_products",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
