from apps.common.repository import GenericRepository
from .models import Order, OrderItem


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def _for_user(self, user_id: int):
        return self.model.objects.filter(user_id=user_id).prefetch_related("items")

    def get_for_user(self, user_id: int, order_id: int):
        return self._for_user(user_id).filter(id=order_id).first()

    def lock_for_user(self, user_id: int, order_id: int):
        """Row lock held until the surrounding transaction ends."""
        return (
            self.model.objects.select_for_update()
            .filter(user_id=user_id, id=order_id)
            .first()
        )

    def list_for_user(self, user_id: int, status=None):
        qs = self._for_user(user_id)
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-created_at", "-id")


class OrderItemRepository(GenericRepository[OrderItem]):
    def __init__(self):
        super().__init__(OrderItem)

    def create_many(self, order: Order, rows):
        return self.model.objects.bulk_create(
            [self.model(order=order, **row) for row in rows]
        )

    def list_for_order(self, order_id: int):
        return self.model.objects.filter(order_id=order_id).order_by("id")
