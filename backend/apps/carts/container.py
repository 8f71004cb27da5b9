from __future__ import annotations

from django.conf import settings

from apps.catalog.repositories import ProductRepository

from .domain import DEFAULT_SHIPPING, DEFAULT_TAX_RATE
from .repositories import CartProductRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(
        carts=CartRepository(),
        cart_products=CartProductRepository(),
        products=ProductRepository(),
        shipping=getattr(settings, "CART_SHIPPING_FLAT_RATE", DEFAULT_SHIPPING),
        tax_rate=getattr(settings, "CART_TAX_RATE", DEFAULT_TAX_RATE),
    )
