from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from apps.catalog.views import (
    ProductListView,
    ProductDetailView,
    ProductStockView,
    CategoryListView,
)

urlpatterns = [
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path(
        "products/<int:product_id>/",
        ProductDetailView.as_view(),
        name="api-products-detail",
    ),
    path(
        "products/<int:product_id>/stock/",
        ProductStockView.as_view(),
        name="api-products-stock",
    ),
    path("categories/", CategoryListView.as_view(), name="api-categories-list"),
    # Shopper-owned resources are scoped to the bearer token's user
    path("cart/", include("apps.carts.urls")),
    path("wishlist/", include("apps.wishlist.urls")),
    path("orders/", include("apps.orders.urls")),
    path("auth/token/", TokenObtainPairView.as_view(), name="api-auth-token"),
    path(
        "auth/token/refresh/",
        TokenRefreshView.as_view(),
        name="api-auth-token-refresh",
    ),
]
