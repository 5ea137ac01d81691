import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from apps.registry.config import get_settings
from apps.registry.tests.samples import initia_asset_list, initia_chain, yominet_chain
from scripts.check_registry import RegistryFetchError, read_document, resolve_source, run


class CheckRegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()
        get_settings.cache_clear()

    def _write(self, name: str, payload: object) -> str:
        path = self.root / name
        path.write_text(json.dumps(payload), encoding='utf-8')
        return str(path)

    def test_resolve_source(self) -> None:
        base = 'https://registry.initia.xyz'
        self.assertEqual(resolve_source('chains.json', remote=False, base_url=base), 'chains.json')
        self.assertEqual(
            resolve_source('/chains/initia/chain.json', remote=True, base_url=base),
            'https://registry.initia.xyz/chains/initia/chain.json'
        )
        self.assertEqual(
            resolve_source('https://example.com/chain.json', remote=True, base_url=base),
            'https://example.com/chain.json'
        )

    def test_read_document_errors(self) -> None:
        with self.assertRaises(RegistryFetchError):
            read_document(str(self.root / 'missing.json'), timeout=1)

        broken = self.root / 'broken.json'
        broken.write_text('{"chain_name": ', encoding='utf-8')
        with self.assertRaises(RegistryFetchError):
            read_document(str(broken), timeout=1)

    def test_prints_canonical_document(self) -> None:
        path = self._write('chain.json', initia_chain())
        out = io.StringIO()

        with redirect_stdout(out):
            status = run([path, '--kind', 'chain', '--canonical'])

        self.assertEqual(status, 0)
        printed = json.loads(out.getvalue())
        self.assertEqual(printed['chain_id'], 'interwoven-1')
        self.assertIn('json-rpc', printed['apis'])

    def test_decode_failure_exit_status(self) -> None:
        raw = initia_asset_list()
        raw['assets'][1]['traces'][0]['type'] = 'bridge'
        path = self._write('assetlist.json', raw)

        with self.assertLogs('registry.check', level='ERROR') as logs:
            status = run([path, '--kind', 'assetlist'])

        self.assertEqual(status, 1)
        self.assertIn('element_error', logs.output[0])

    def test_strict_mode_with_cross_chain_issues(self) -> None:
        assets = self._write('assetlist.json', initia_asset_list())
        chains = self._write('chains.json', [initia_chain(), yominet_chain()])

        with self.assertLogs('registry.check', level='WARNING') as logs:
            status = run([assets, '--kind', 'assetlist', '--chains', chains, '--strict'])

        self.assertEqual(status, 2)
        self.assertTrue(any('unknown chain noble' in line for line in logs.output))

    def test_issues_without_strict_succeed(self) -> None:
        raw = yominet_chain()
        raw['metadata']['is_l1'] = True
        path = self._write('chain.json', raw)

        with patch.dict('os.environ', {'REGISTRY_EMIT_NULLS': 'false'}, clear=False):
            get_settings.cache_clear()
            with self.assertLogs('registry.check', level='WARNING'):
                status = run([path, '--kind', 'chain'])

        self.assertEqual(status, 0)
