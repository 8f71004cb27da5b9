from dataclasses import dataclass
from typing import List


@dataclass
class CategoryDTO:
    id: int
    name: str


@dataclass
class ProductDTO:
    id: int
    title: str
    price: str
    description: str
    image: str
    stock_quantity: int
    in_stock: bool
    categories: List[CategoryDTO]
