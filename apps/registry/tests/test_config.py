import unittest
from unittest.mock import patch

from apps.registry.config import get_settings


class SettingsTests(unittest.TestCase):
    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_defaults(self) -> None:
        with patch.dict('os.environ', {}, clear=True):
            get_settings.cache_clear()
            settings = get_settings()

        self.assertEqual(settings.app_name, 'registry-schema-api')
        self.assertEqual(settings.environment, 'dev')
        self.assertEqual(settings.registry_base_url, 'https://registry.initia.xyz')
        self.assertEqual(settings.http_timeout_seconds, 10)
        self.assertEqual(settings.decode_workers, 0)
        self.assertFalse(settings.emit_nulls)

    def test_reads_environment(self) -> None:
        with patch.dict(
            'os.environ',
            {
                'ENVIRONMENT': 'PROD',
                'REGISTRY_BASE_URL': 'https://registry.testnet.initia.xyz/',
                'REGISTRY_HTTP_TIMEOUT_SECONDS': '3',
                'REGISTRY_DECODE_WORKERS': '4',
                'REGISTRY_EMIT_NULLS': 'yes'
            },
            clear=False
        ):
            get_settings.cache_clear()
            settings = get_settings()

        self.assertEqual(settings.environment, 'prod')
        self.assertEqual(settings.registry_base_url, 'https://registry.testnet.initia.xyz')
        self.assertEqual(settings.http_timeout_seconds, 3)
        self.assertEqual(settings.decode_workers, 4)
        self.assertTrue(settings.emit_nulls)

    def test_invalid_values_fall_back(self) -> None:
        with patch.dict(
            'os.environ',
            {
                'ENVIRONMENT': 'staging',
                'REGISTRY_HTTP_TIMEOUT_SECONDS': 'soon',
                'REGISTRY_DECODE_WORKERS': '-2'
            },
            clear=False
        ):
            get_settings.cache_clear()
            settings = get_settings()

        self.assertEqual(settings.environment, 'dev')
        self.assertEqual(settings.http_timeout_seconds, 10)
        self.assertEqual(settings.decode_workers, 0)
