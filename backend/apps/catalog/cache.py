from typing import Callable, List, Optional

from apps.common import get_logger
from .dtos import ProductDTO
from .protocols import CacheBackendProtocol

logger = get_logger(__name__).bind(component="catalog", layer="cache")


class ProductListCache:
    """
    Browse results cached per filter combination.

    Every entry key embeds a generation number. Stock changes bump the
    generation, so stale availability is never served after a restock, a
    checkout or a cancellation; old entries simply age out.
    """

    GENERATION_KEY = "catalog:generation"

    def __init__(
        self,
        backend: CacheBackendProtocol,
        *,
        timeout: Optional[int] = None,
        enabled: bool = True,
    ):
        self.backend = backend
        self.timeout = timeout
        self.enabled = enabled

    def _generation(self) -> int:
        return self.backend.get(self.GENERATION_KEY) or 1

    def key(self, category: Optional[str], available_only: bool) -> str:
        scope = "in-stock" if available_only else "all"
        return f"catalog:g{self._generation()}:{category or '*'}:{scope}"

    def fetch(
        self,
        category: Optional[str],
        available_only: bool,
        loader: Callable[[], List[ProductDTO]],
    ) -> List[ProductDTO]:
        if not self.enabled:
            return loader()
        key = self.key(category, available_only)
        products = self.backend.get(key)
        if products is None:
            logger.debug("Browse cache miss", cache_key=key)
            products = loader()
            self.backend.set(key, products, timeout=self.timeout)
        return products

    def invalidate(self) -> None:
        generation = self._generation() + 1
        self.backend.set(self.GENERATION_KEY, generation, timeout=None)
        logger.debug("Browse cache invalidated", generation=generation)
