from typing import Iterable, List

from .dtos import ProductDTO, CategoryDTO
from .models import Product, Category


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(id=cat.id, name=cat.name)

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        stock = int(product.stock_quantity or 0)
        return ProductDTO(
            id=product.id,
            title=product.title,
            price=str(product.price),
            description=product.description,
            image=product.image,
            stock_quantity=stock,
            in_stock=stock > 0,
            categories=CategoryMapper.many_to_dto(product.categories.all()),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
