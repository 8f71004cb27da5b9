from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class WishlistAddCommand:
    product_id: int

    @staticmethod
    def from_raw(raw: Dict[str, Any]):
        if not isinstance(raw, dict):
            return None
        pid = raw.get("product_id")
        if pid is None:
            pid = raw.get("productId")
        if isinstance(pid, bool):
            return None
        try:
            pid = int(pid)
        except (ValueError, TypeError):
            return None
        if pid <= 0:
            return None
        return WishlistAddCommand(product_id=pid)
