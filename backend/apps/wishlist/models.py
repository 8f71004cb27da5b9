from django.db import models
from django.utils import timezone
from apps.users.models import User
from apps.catalog.models import Product


class WishlistItem(models.Model):
    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="wishlist_items"
    )
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    liked = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        unique_together = ("user", "product")
        db_table = "wishlist_items"
        ordering = ("id",)

    def __str__(self):
        return f"Wishlist item {self.product_id} for {self.user_id}"
