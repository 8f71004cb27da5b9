from rest_framework import serializers


class WishlistItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    name = serializers.CharField()
    unit_price = serializers.CharField()
    image = serializers.CharField(allow_blank=True)
    in_stock = serializers.BooleanField()
    liked = serializers.BooleanField()


class WishlistReadSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    items = WishlistItemSerializer(many=True)
    count = serializers.IntegerField()
    count_label = serializers.CharField()
    is_empty = serializers.BooleanField()


class WishlistAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
