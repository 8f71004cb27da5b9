from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Dict, Hashable, Iterator, Optional, Tuple

from apps.carts.domain import Number, to_decimal
from apps.common import get_logger

logger = get_logger(__name__).bind(component="wishlist", layer="domain")


@dataclass(frozen=True)
class WishlistEntry:
    item_id: Hashable
    display_name: str
    unit_price: Decimal
    in_stock: bool = True
    liked: bool = True
    image: str = ""

    def __post_init__(self):
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        if self.unit_price < 0:
            raise ValueError("unit_price must be non-negative")


MoveToCartListener = Callable[[WishlistEntry], None]


class WishlistManager:
    """Ordered wishlist keyed by item id.

    ``on_move_to_cart`` is called with the removed entry after a successful
    move. Nothing is wired by default; the cart hand-off is decided by the
    caller.
    """

    def __init__(
        self,
        entries=(),
        *,
        on_move_to_cart: Optional[MoveToCartListener] = None,
    ):
        self.on_move_to_cart = on_move_to_cart
        self._entries: Dict[Hashable, WishlistEntry] = {}
        for entry in entries:
            self.add(entry)

    @property
    def entries(self) -> Tuple[WishlistEntry, ...]:
        return tuple(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WishlistEntry]:
        return iter(self.entries)

    def __contains__(self, item_id) -> bool:
        return item_id in self._entries

    def get(self, item_id) -> Optional[WishlistEntry]:
        return self._entries.get(item_id)

    def add(self, entry: WishlistEntry) -> WishlistEntry:
        existing = self._entries.get(entry.item_id)
        if existing is not None:
            return existing
        self._entries[entry.item_id] = entry
        return entry

    def remove(self, item_id) -> bool:
        if item_id not in self._entries:
            logger.debug("Remove ignored for unknown entry", item_id=item_id)
            return False
        del self._entries[item_id]
        return True

    def toggle_liked(self, item_id) -> Optional[WishlistEntry]:
        current = self._entries.get(item_id)
        if current is None:
            return None
        updated = replace(current, liked=not current.liked)
        self._entries[item_id] = updated
        return updated

    def move_to_cart(self, item_id) -> Optional[WishlistEntry]:
        entry = self._entries.get(item_id)
        if entry is None:
            logger.debug("Move to cart ignored for unknown entry", item_id=item_id)
            return None
        if not entry.in_stock:
            logger.info("Move to cart rejected: out of stock", item_id=item_id)
            return None
        del self._entries[item_id]
        logger.info("Moving entry to cart", item_id=item_id)
        if self.on_move_to_cart is not None:
            self.on_move_to_cart(entry)
        return entry

    def count(self) -> int:
        return len(self._entries)

    def count_label(self) -> str:
        n = self.count()
        return f"{n} {'item' if n == 1 else 'items'}"

    def is_empty(self) -> bool:
        return not self._entries
