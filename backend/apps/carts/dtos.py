from dataclasses import dataclass
from typing import List


@dataclass
class CartLineDTO:
    product_id: int
    name: str
    unit_price: str
    quantity: int
    line_total: str
    image: str


@dataclass
class CartTotalsDTO:
    subtotal: str
    shipping: str
    tax: str
    total: str


@dataclass
class CartDTO:
    id: int
    user_id: int
    date: str
    items: List[CartLineDTO]
    totals: CartTotalsDTO
    item_count: int
    is_empty: bool
