import json
import unittest
from unittest import mock

import redis
from django.db.utils import OperationalError
from django.test import SimpleTestCase, override_settings

from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.content), {'status': 'alive'})

    @mock.patch('apps.common.views._redis_url', return_value=None)
    @mock.patch('apps.common.views._db_check', return_value={'status': 'ok', 'latency_ms': 1.23})
    def test_ready_health_ok_when_database_passes(self, mock_db_check, _mock_url):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)
        self.assertEqual(payload['checks']['cache']['status'], 'skipped')

    @mock.patch('apps.common.views._redis_url', return_value='redis://localhost:6379/1')
    @mock.patch('apps.common.views._redis_ping', return_value={'status': 'fail', 'error': 'unreachable'})
    @mock.patch('apps.common.views._db_check', return_value={'status': 'ok', 'latency_ms': 0.5})
    def test_ready_health_degraded_when_redis_fails(self, _mock_db, mock_ping, _mock_url):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'degraded')
        self.assertEqual(payload['checks']['cache'], mock_ping.return_value)
        mock_ping.assert_called_once_with('redis://localhost:6379/1')

    @mock.patch('apps.common.views.connections')
    def test_db_check_reports_operational_error(self, mock_connections):
        cursor_cm = mock_connections.__getitem__.return_value.cursor.return_value
        cursor_cm.__enter__.return_value.execute.side_effect = OperationalError('refused')
        result = views._db_check()
        self.assertEqual(result['status'], 'fail')
        self.assertIn('refused', result['error'])

    @mock.patch('apps.common.views.redis.from_url')
    def test_redis_ping_reports_connection_error(self, mock_from_url):
        mock_from_url.return_value.ping.side_effect = redis.ConnectionError('down')
        result = views._redis_ping('redis://nowhere:6379/0')
        self.assertEqual(result, {'status': 'fail', 'error': 'down'})


class RedisUrlResolutionTests(SimpleTestCase):
    @override_settings(CACHES={'default': {'BACKEND': 'django.core.cache.backends.locmem.LocMemCache'}})
    def test_non_redis_cache_skips_ping(self):
        self.assertIsNone(views._redis_url())

    @override_settings(
        CACHES={'default': {'BACKEND': 'django_redis.cache.RedisCache', 'LOCATION': 'redis://cache:6379/2'}}
    )
    def test_redis_cache_location_is_used(self):
        self.assertEqual(views._redis_url(), 'redis://cache:6379/2')
