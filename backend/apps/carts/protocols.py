from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartProduct

if TYPE_CHECKING:
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Cart]:
        ...

    def get_or_create_for_user(self, user_id: int) -> Cart:
        ...

    def lock(self, cart_id: int) -> Cart:
        ...


class CartProductRepositoryProtocol(Protocol):
    def list_for_cart(self, cart_id: int) -> Iterable[CartProduct]:
        ...

    def upsert(self, cart: Cart, product: "Product", quantity: int) -> CartProduct:
        ...

    def delete_product(self, cart: Cart, product_id: int) -> None:
        ...

    def delete_for_cart(self, cart: Cart) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...

    def get_for_update(self, product_id: int) -> Optional["Product"]:
        ...
