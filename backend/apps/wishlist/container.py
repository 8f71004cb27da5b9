from __future__ import annotations

from django.conf import settings

from apps.carts.container import build_cart_service
from apps.catalog.repositories import ProductRepository

from .repositories import WishlistItemRepository
from .services import AddToCartHandoff, WishlistService


def _adds_to_cart() -> bool:
    return bool(getattr(settings, "WISHLIST_MOVE_TO_CART_ADDS_TO_CART", False))


def build_wishlist_service() -> WishlistService:
    return WishlistService(
        items=WishlistItemRepository(),
        products=ProductRepository(),
        cart_handoff=AddToCartHandoff(build_cart_service(), enabled=_adds_to_cart),
    )
