from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class OrderListPagination(PageNumberPagination):
    page_size = getattr(settings, "ORDERS_PAGE_SIZE", 10)
    page_size_query_param = "limit"
    max_page_size = 50
