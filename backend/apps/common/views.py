import time

import redis
from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')

REDIS_CACHE_BACKEND = 'django_redis.cache.RedisCache'


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


def _redis_url():
    """Redis location of the default cache, or None when another backend is configured."""
    cache_conf = settings.CACHES.get('default', {})
    if cache_conf.get('BACKEND') != REDIS_CACHE_BACKEND:
        return None
    return cache_conf.get('LOCATION') or getattr(settings, 'REDIS_URL', None)


def _redis_ping(url: str, timeout: float = 0.3):
    started = time.monotonic()
    try:
        client = redis.from_url(url, socket_connect_timeout=timeout, socket_timeout=timeout)
        if not client.ping():
            logger.warning('Redis health check returned unexpected response')
            return {'status': 'fail', 'error': 'unexpected ping response'}
    except redis.RedisError as e:
        logger.warning('Redis health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}
    latency = _elapsed_ms(started)
    logger.debug('Redis health check succeeded', latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _db_check(alias='default'):
    started = time.monotonic()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute('SELECT 1')
    except OperationalError as e:
        logger.warning('Database health check failed', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    latency = _elapsed_ms(started)
    logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def live_health(request):
    """Liveness probe: the process is up and serving requests."""
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the database answers and, when the cache is Redis, Redis answers."""
    checks = {'database': _db_check()}
    redis_url = _redis_url()
    if redis_url:
        checks['cache'] = _redis_ping(redis_url)
    else:
        checks['cache'] = {'status': 'skipped', 'detail': 'cache is not redis-backed'}

    failing = [name for name, result in checks.items() if result.get('status') == 'fail']
    overall = 'degraded' if failing else 'ok'
    logger.info('Readiness probe evaluated', status=overall, failing_components=failing)
    return JsonResponse({'status': overall, 'checks': checks}, status=503 if failing else 200)
