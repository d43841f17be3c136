# order/serializers.py
from rest_framework import serializers

from product.serializers import ProductBriefSerializer
from .models import Notification, Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product = ProductBriefSerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product", "quantity", "price", "line_total"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    payment_status = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "user",
            "status",
            "total_amount",
            "shipping_address",
            "billing_address",
            "payment_method",
            "payment_status",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields  # all are read-only for output only

    def get_payment_status(self, obj):
        return (obj.payment_result or {}).get("status")


class CheckoutSerializer(serializers.Serializer):
    shipping_address = serializers.DictField()
    billing_address = serializers.DictField()
    payment_method = serializers.CharField(max_length=50)
    payment_token = serializers.CharField()

    def _non_empty(self, value):
        if not value:
            raise serializers.ValidationError("Address cannot be empty.")
        return value

    def validate_shipping_address(self, value):
        return self._non_empty(value)

    def validate_billing_address(self, value):
        return self._non_empty(value)


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["id", "order", "message", "read", "created_at"]
        read_only_fields = fields
