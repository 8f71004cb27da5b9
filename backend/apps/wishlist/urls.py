from django.urls import re_path
from .views import (
    WishlistView,
    WishlistItemListView,
    WishlistItemDetailView,
    WishlistItemLikeView,
    WishlistItemMoveToCartView,
)

urlpatterns = [
    re_path(r"^$", WishlistView.as_view(), name="api-wishlist"),
    re_path(r"^items/?$", WishlistItemListView.as_view(), name="api-wishlist-items"),
    re_path(
        r"^items/(?P<product_id>\d+)/?$",
        WishlistItemDetailView.as_view(),
        name="api-wishlist-item-detail",
    ),
    re_path(
        r"^items/(?P<product_id>\d+)/like/?$",
        WishlistItemLikeView.as_view(),
        name="api-wishlist-item-like",
    ),
    re_path(
        r"^items/(?P<product_id>\d+)/move-to-cart/?$",
        WishlistItemMoveToCartView.as_view(),
        name="api-wishlist-item-move",
    ),
]
