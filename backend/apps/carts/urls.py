from django.urls import re_path
from .views import CartView, CartItemListView, CartItemDetailView

urlpatterns = [
    re_path(r"^$", CartView.as_view(), name="api-cart"),
    re_path(r"^items/?$", CartItemListView.as_view(), name="api-cart-items"),
    re_path(
        r"^items/(?P<product_id>\d+)/?$",
        CartItemDetailView.as_view(),
        name="api-cart-item-detail",
    ),
]
