from apps.catalog.cache import ProductListCache


class FakeCache(dict):
    def set(self, key, value, timeout=None):
        self[key] = value


def test_fetch_loads_once_per_generation():
    backend = FakeCache()
    cache = ProductListCache(backend, timeout=30)
    calls = []

    def loader():
        calls.append(1)
        return ["headphones"]

    assert cache.fetch("audio", False, loader) == ["headphones"]
    assert cache.fetch("audio", False, loader) == ["headphones"]
    assert len(calls) == 1
    cache.invalidate()
    cache.fetch("audio", False, loader)
    assert len(calls) == 2


def test_keys_separate_filters_and_generations():
    cache = ProductListCache(FakeCache())
    assert cache.key(None, False) == "catalog:g1:*:all"
    assert cache.key("audio", True) == "catalog:g1:audio:in-stock"
    cache.invalidate()
    assert cache.key(None, False) == "catalog:g2:*:all"


def test_disabled_cache_always_loads():
    backend = FakeCache()
    cache = ProductListCache(backend, enabled=False)
    calls = []
    cache.fetch(None, False, lambda: calls.append(1) or [])
    cache.fetch(None, False, lambda: calls.append(1) or [])
    assert len(calls) == 2
    assert backend == {}
