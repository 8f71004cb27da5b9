from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from .models import Order, OrderItem


class OrderRepositoryProtocol(Protocol):
    def create(self, **data) -> Order:
        ...

    def get_for_user(self, user_id: int, order_id: int) -> Optional[Order]:
        ...

    def lock_for_user(self, user_id: int, order_id: int) -> Optional[Order]:
        ...

    def list_for_user(self, user_id: int, status: Optional[str] = None) -> Iterable[Order]:
        ...

    def update_fields(self, obj: Order, **data) -> Order:
        ...


class OrderItemRepositoryProtocol(Protocol):
    def create_many(self, order: Order, rows: Iterable[dict]) -> Iterable[OrderItem]:
        ...

    def list_for_order(self, order_id: int) -> Iterable[OrderItem]:
        ...


class StockKeeperProtocol(Protocol):
    def take_stock(self, product_id: int, quantity: int) -> Any:
        ...

    def return_stock(self, product_id: int, quantity: int) -> None:
        ...
