from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import WishlistItem

if TYPE_CHECKING:
    from apps.catalog.models import Product


class WishlistItemRepositoryProtocol(Protocol):
    def list_for_user(self, user_id: int) -> Iterable[WishlistItem]:
        ...

    def create(self, **data) -> WishlistItem:
        ...

    def set_liked(self, user_id: int, product_id: int, liked: bool) -> None:
        ...

    def delete_product(self, user_id: int, product_id: int) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...
