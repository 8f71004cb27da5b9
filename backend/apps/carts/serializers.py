from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    name = serializers.CharField()
    unit_price = serializers.CharField()
    quantity = serializers.IntegerField()
    line_total = serializers.CharField()
    image = serializers.CharField(allow_blank=True)


class CartTotalsSerializer(serializers.Serializer):
    # Decimal strings rounded half-up to cents
    subtotal = serializers.CharField()
    shipping = serializers.CharField()
    tax = serializers.CharField()
    total = serializers.CharField()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    date = serializers.CharField()
    items = CartLineSerializer(many=True)
    totals = CartTotalsSerializer()
    item_count = serializers.IntegerField()
    is_empty = serializers.BooleanField()


class CartItemWriteSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class CartQuantitySerializer(serializers.Serializer):
    # No lower bound: quantities below 1 are ignored by the cart
    quantity = serializers.IntegerField()
