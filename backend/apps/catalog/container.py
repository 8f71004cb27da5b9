from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from .cache import ProductListCache
from .repositories import CategoryRepository, ProductRepository
from .services import CatalogService


def build_catalog_service() -> CatalogService:
    return CatalogService(
        products=ProductRepository(),
        categories=CategoryRepository(),
        cache=ProductListCache(
            cache,
            timeout=getattr(settings, "CACHE_TTL", None),
            enabled=getattr(settings, "CATALOG_CACHE_ENABLED", True),
        ),
    )
