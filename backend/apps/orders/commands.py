from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .models import Order


@dataclass
class CheckoutCommand:
    shipping_address: str = ""
    payment_method: str = ""

    @staticmethod
    def from_raw(payload: Mapping[str, Any]) -> "CheckoutCommand":
        return CheckoutCommand(
            shipping_address=(payload.get("shipping_address") or "").strip(),
            payment_method=(payload.get("payment_method") or "").strip(),
        )


@dataclass
class OrderQuery:
    status: Optional[str] = None

    @staticmethod
    def from_params(params: Mapping[str, Any]) -> "OrderQuery":
        """Raises ``ValueError`` for a status no order can have."""
        status = (params.get("status") or "").strip().lower() or None
        if status is not None and status not in Order.Status.values:
            raise ValueError(f"Unknown order status: {status}")
        return OrderQuery(status=status)
