from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.repository import GenericRepository
from .models import Cart, CartProduct


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get(self, **filters):
        return self.model.objects.select_related("user").filter(**filters).first()

    def get_or_create_for_user(self, user_id: int) -> Cart:
        defaults = {"date": timezone.now().date()}
        try:
            with transaction.atomic():
                cart, _ = self.model.objects.get_or_create(
                    user_id=user_id, defaults=defaults
                )
        except IntegrityError:
            # Lost a race with a concurrent request creating the same cart
            cart = self.model.objects.get(user_id=user_id)
        return cart

    def lock(self, cart_id: int) -> Cart:
        """Row lock held until the surrounding transaction ends."""
        return self.model.objects.select_for_update().get(id=cart_id)


class CartProductRepository(GenericRepository[CartProduct]):
    def __init__(self):
        super().__init__(CartProduct)

    def list_for_cart(self, cart_id: int):
        return (
            self.model.objects.filter(cart_id=cart_id)
            .select_related("product")
            .order_by("id")
        )

    def upsert(self, cart: Cart, product, quantity: int) -> CartProduct:
        item, created = self.model.objects.get_or_create(
            cart=cart, product=product, defaults={"quantity": quantity}
        )
        if not created and item.quantity != quantity:
            item.quantity = quantity
            item.save(update_fields=["quantity"])
        return item

    def delete_product(self, cart: Cart, product_id: int):
        self.delete_where(cart=cart, product_id=product_id)

    def delete_for_cart(self, cart: Cart):
        self.delete_where(cart=cart)
