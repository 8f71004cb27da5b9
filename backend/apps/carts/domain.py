"""In-memory cart view-model.

The manager owns an ordered collection of lines keyed by item id. Totals are
derived on every read and are never stored rounded; call
:meth:`CartTotals.quantized` when presenting them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Hashable, Iterator, Optional, Tuple, Union

from apps.common import get_logger

logger = get_logger(__name__).bind(component="carts", layer="domain")

DEFAULT_SHIPPING = Decimal("5.99")
DEFAULT_TAX_RATE = Decimal("0.10")
CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # floats go through str() so 99.99 stays 99.99
    return Decimal(str(value))


@dataclass(frozen=True)
class CartLine:
    item_id: Hashable
    display_name: str
    unit_price: Decimal
    quantity: int = 1
    image: str = ""

    def __post_init__(self):
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        if self.unit_price < 0:
            raise ValueError("unit_price must be non-negative")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer")
        if self.quantity < 1:
            raise ValueError("quantity must be at least 1")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    def quantized(self, places: Decimal = CENT) -> "CartTotals":
        """Round each figure independently from its unrounded value."""
        return CartTotals(
            subtotal=self.subtotal.quantize(places, rounding=ROUND_HALF_UP),
            shipping=self.shipping.quantize(places, rounding=ROUND_HALF_UP),
            tax=self.tax.quantize(places, rounding=ROUND_HALF_UP),
            total=self.total.quantize(places, rounding=ROUND_HALF_UP),
        )


class CartManager:
    def __init__(
        self,
        lines=(),
        *,
        shipping: Number = DEFAULT_SHIPPING,
        tax_rate: Number = DEFAULT_TAX_RATE,
    ):
        self.shipping = to_decimal(shipping)
        self.tax_rate = to_decimal(tax_rate)
        self._lines: Dict[Hashable, CartLine] = {}
        for line in lines:
            self.add(line)

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __contains__(self, item_id) -> bool:
        return item_id in self._lines

    def get(self, item_id) -> Optional[CartLine]:
        return self._lines.get(item_id)

    def add(self, line: CartLine) -> CartLine:
        """Append a line, merging quantities when the item is already present."""
        current = self._lines.get(line.item_id)
        if current is not None:
            line = replace(current, quantity=current.quantity + line.quantity)
        self._lines[line.item_id] = line
        return line

    def remove(self, item_id) -> bool:
        if item_id not in self._lines:
            logger.debug("Remove ignored for unknown line", item_id=item_id)
            return False
        del self._lines[item_id]
        return True

    def set_quantity(self, item_id, new_qty: int) -> bool:
        current = self._lines.get(item_id)
        if current is None:
            logger.debug("Quantity change ignored for unknown line", item_id=item_id)
            return False
        if new_qty < 1:
            logger.debug(
                "Quantity change rejected", item_id=item_id, quantity=new_qty
            )
            return False
        # Assigning to an existing key keeps the line's position
        self._lines[item_id] = replace(current, quantity=new_qty)
        return True

    def clear(self) -> None:
        self._lines.clear()

    def is_empty(self) -> bool:
        return not self._lines

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def compute_totals(self) -> CartTotals:
        subtotal = sum((line.line_total for line in self._lines.values()), Decimal("0"))
        tax = subtotal * self.tax_rate
        return CartTotals(
            subtotal=subtotal,
            shipping=self.shipping,
            tax=tax,
            total=subtotal + self.shipping + tax,
        )
