from dataclasses import dataclass
from typing import Any, Dict, Optional


def _to_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


@dataclass
class CartItemCommand:
    product_id: int
    quantity: int = 1

    @staticmethod
    def from_raw(raw: Dict[str, Any]):
        if not isinstance(raw, dict):
            return None
        pid = raw.get("product_id")
        if pid is None:
            pid = raw.get("productId")
        if pid is None:
            # nested product object fallback
            product = raw.get("product")
            if isinstance(product, dict):
                pid = product.get("id")
        pid = _to_int(pid)
        qty = _to_int(raw.get("quantity", 1))
        if not pid or qty is None or qty <= 0:
            return None
        return CartItemCommand(product_id=pid, quantity=qty)


@dataclass
class CartQuantityCommand:
    """Quantity change for one line. Values below 1 are kept so the cart can ignore them."""

    product_id: int
    quantity: int

    @staticmethod
    def from_raw(product_id: int, payload: Dict[str, Any]):
        if not isinstance(payload, dict):
            raise ValueError("Payload must be a dict")
        qty = _to_int(payload.get("quantity"))
        if qty is None:
            raise ValueError("quantity must be an integer")
        return CartQuantityCommand(product_id=int(product_id), quantity=qty)
