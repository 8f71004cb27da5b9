from typing import Optional

from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def _with_categories(self):
        return self.model.objects.prefetch_related("categories")

    def get(self, **filters) -> Optional[Product]:
        return self._with_categories().filter(**filters).first()

    def browse(self, category: Optional[str] = None, available_only: bool = False):
        qs = self._with_categories()
        if category:
            qs = qs.filter(categories__name=category)
        if available_only:
            qs = qs.filter(stock_quantity__gt=0)
        return qs.order_by("id")

    def get_for_update(self, product_id: int) -> Optional[Product]:
        return self.model.objects.select_for_update().filter(id=product_id).first()

    def set_stock(self, product: Product, quantity: int) -> Product:
        return self.update_fields(product, stock_quantity=quantity)
