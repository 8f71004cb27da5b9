from dataclasses import dataclass
from typing import Any, Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ProductQuery:
    category: Optional[str] = None
    available_only: bool = False

    @staticmethod
    def from_params(params: Mapping[str, Any]) -> "ProductQuery":
        category = (params.get("category") or "").strip() or None
        raw = str(params.get("in_stock") or "").strip().lower()
        return ProductQuery(category=category, available_only=raw in _TRUTHY)


@dataclass
class StockCommand:
    product_id: int
    quantity: int

    @staticmethod
    def from_raw(product_id, payload: Mapping[str, Any]) -> "StockCommand":
        quantity = payload.get("stock_quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValueError("stock_quantity must be a non-negative integer")
        return StockCommand(product_id=int(product_id), quantity=quantity)
