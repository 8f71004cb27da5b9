from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class ProductListPagination(PageNumberPagination):
    page_size = getattr(settings, "CATALOG_PAGE_SIZE", 20)
    # `?limit=` overrides the page size up to max_page_size
    page_size_query_param = "limit"
    max_page_size = 100
