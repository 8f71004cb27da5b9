from dataclasses import dataclass
from typing import List, Optional


@dataclass
class OrderItemDTO:
    product_id: Optional[int]
    title: str
    unit_price: str
    quantity: int
    line_total: str


@dataclass
class OrderDTO:
    id: int
    user_id: int
    status: str
    subtotal: str
    shipping: str
    tax: str
    total: str
    shipping_address: str
    payment_method: str
    created_at: str
    items: List[OrderItemDTO]
