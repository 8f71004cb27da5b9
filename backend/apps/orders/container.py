from __future__ import annotations

from apps.carts.container import build_cart_service
from apps.catalog.container import build_catalog_service

from .repositories import OrderItemRepository, OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        order_items=OrderItemRepository(),
        cart_service=build_cart_service(),
        stock=build_catalog_service(),
    )
