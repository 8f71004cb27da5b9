from rest_framework import serializers

from .models import Order


class OrderItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(allow_null=True)
    title = serializers.CharField()
    unit_price = serializers.CharField()
    quantity = serializers.IntegerField()
    line_total = serializers.CharField()


class OrderReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=Order.Status.choices)
    # Decimal strings rounded half-up to cents
    subtotal = serializers.CharField()
    shipping = serializers.CharField()
    tax = serializers.CharField()
    total = serializers.CharField()
    shipping_address = serializers.CharField(allow_blank=True)
    payment_method = serializers.CharField(allow_blank=True)
    created_at = serializers.CharField()
    items = OrderItemSerializer(many=True)


class CheckoutSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(required=False, allow_blank=True, default="")
    payment_method = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=50
    )
