from dataclasses import dataclass
from typing import List


@dataclass
class WishlistItemDTO:
    product_id: int
    name: str
    unit_price: str
    image: str
    in_stock: bool
    liked: bool


@dataclass
class WishlistDTO:
    user_id: int
    items: List[WishlistItemDTO]
    count: int
    count_label: str
    is_empty: bool
