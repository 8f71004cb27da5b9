from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from .models import Category, Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Product]:
        ...

    def browse(self, category: Optional[str] = None, available_only: bool = False) -> Iterable[Product]:
        ...

    def get_for_update(self, product_id: int) -> Optional[Product]:
        ...

    def set_stock(self, product: Product, quantity: int) -> Product:
        ...


class CategoryRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Category]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
