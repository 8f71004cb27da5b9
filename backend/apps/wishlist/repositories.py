from apps.common.repository import GenericRepository
from .models import WishlistItem


class WishlistItemRepository(GenericRepository[WishlistItem]):
    def __init__(self):
        super().__init__(WishlistItem)

    def list_for_user(self, user_id: int):
        return (
            self.model.objects.filter(user_id=user_id)
            .select_related("product")
            .order_by("id")
        )

    def set_liked(self, user_id: int, product_id: int, liked: bool):
        self.model.objects.filter(user_id=user_id, product_id=product_id).update(
            liked=liked
        )

    def delete_product(self, user_id: int, product_id: int):
        self.delete_where(user_id=user_id, product_id=product_id)
