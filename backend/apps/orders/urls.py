from django.urls import re_path
from .views import OrderCancelView, OrderDetailView, OrderListView

urlpatterns = [
    re_path(r"^$", OrderListView.as_view(), name="api-orders"),
    re_path(r"^(?P<order_id>\d+)/?$", OrderDetailView.as_view(), name="api-order-detail"),
    re_path(
        r"^(?P<order_id>\d+)/cancel/?$",
        OrderCancelView.as_view(),
        name="api-order-cancel",
    ),
]
