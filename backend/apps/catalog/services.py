from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from apps.common import get_logger
from .cache import ProductListCache
from .dtos import CategoryDTO, ProductDTO
from .mappers import CategoryMapper, ProductMapper
from .models import Product
from .protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


def _not_found(product_id: int) -> ServiceError:
    return "NOT_FOUND", "Product not found", {"productId": str(product_id)}


class CatalogService:
    """Product browsing plus the stock movements carts and orders depend on."""

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
        cache: ProductListCache,
    ):
        self.products = products
        self.categories = categories
        self.cache = cache
        self.logger = logger.bind(service="CatalogService")

    def browse(self, category: Optional[str] = None, available_only: bool = False) -> List[ProductDTO]:
        self.logger.debug("Browsing products", category=category, available_only=available_only)
        return self.cache.fetch(
            category,
            available_only,
            lambda: ProductMapper.many_to_dto(self.products.browse(category, available_only)),
        )

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.info("Product not found", product_id=product_id)
            return None
        return ProductMapper.to_dto(product)

    def list_categories(self) -> List[CategoryDTO]:
        return CategoryMapper.many_to_dto(self.categories.list())

    def set_stock(
        self, product_id: int, quantity: int
    ) -> Tuple[Optional[ProductDTO], Optional[ServiceError]]:
        with transaction.atomic():
            product = self.products.get_for_update(product_id)
            if product is None:
                return None, _not_found(product_id)
            previous = product.stock_quantity
            self.products.set_stock(product, quantity)
        self.cache.invalidate()
        self.logger.info("Stock set", product_id=product_id, previous=previous, stock=quantity)
        return self.get_product(product_id), None

    def take_stock(
        self, product_id: int, quantity: int
    ) -> Tuple[Optional[Product], Optional[ServiceError]]:
        """Decrement stock on a locked row. Runs inside the caller's transaction."""
        product = self.products.get_for_update(product_id)
        if product is None:
            return None, _not_found(product_id)
        if quantity > product.stock_quantity:
            self.logger.info(
                "Not enough stock to take",
                product_id=product_id,
                requested=quantity,
                available=product.stock_quantity,
            )
            return None, (
                "VALIDATION_ERROR",
                "Not enough stock available",
                {
                    "productId": str(product_id),
                    "requested": quantity,
                    "available": product.stock_quantity,
                },
            )
        self.products.set_stock(product, product.stock_quantity - quantity)
        transaction.on_commit(self.cache.invalidate)
        return product, None

    def return_stock(self, product_id: int, quantity: int) -> None:
        """Put stock back after a cancellation. Deleted products are skipped."""
        product = self.products.get_for_update(product_id)
        if product is None:
            self.logger.warning("Cannot return stock to missing product", product_id=product_id)
            return
        self.products.set_stock(product, product.stock_quantity + quantity)
        transaction.on_commit(self.cache.invalidate)
