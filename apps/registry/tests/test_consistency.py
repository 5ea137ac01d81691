import unittest

from apps.registry.asset import Asset, AssetList
from apps.registry.chain import Chain, ChainList
from apps.registry.consistency import Issue, check_asset, check_asset_list, check_chain
from apps.registry.tests.samples import (
    init_asset,
    initia_asset_list,
    initia_chain,
    usdc_asset,
    yominet_chain,
    yominet_init_asset
)


class AssetConsistencyTests(unittest.TestCase):
    def test_consistent_asset(self) -> None:
        self.assertEqual(check_asset(Asset.decode(init_asset())), [])

    def test_base_missing_from_denom_units(self) -> None:
        raw = init_asset()
        raw['denom_units'] = [{'denom': 'INIT', 'exponent': 6}]

        issues = check_asset(Asset.decode(raw))

        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].subject, 'asset:uinit')
        self.assertIn('base denom uinit', issues[0].message)

    def test_display_missing_from_denom_units(self) -> None:
        raw = init_asset()
        raw['display'] = 'MINIT'

        issues = check_asset(Asset.decode(raw))

        self.assertEqual([issue.message for issue in issues], ['display denom MINIT is not listed in denom_units'])


class ChainConsistencyTests(unittest.TestCase):
    def test_l1_and_rollup_are_consistent(self) -> None:
        self.assertEqual(check_chain(Chain.decode(initia_chain())), [])
        self.assertEqual(check_chain(Chain.decode(yominet_chain())), [])

    def test_rollup_marked_as_l1(self) -> None:
        raw = yominet_chain()
        raw['metadata']['is_l1'] = True

        issues = check_chain(Chain.decode(raw))

        self.assertEqual(issues, [Issue('chain:yominet', 'minievm rollup is marked as is_l1')])

    def test_rollup_with_false_l1_flag(self) -> None:
        raw = yominet_chain()
        raw['metadata']['is_l1'] = False
        self.assertEqual(check_chain(Chain.decode(raw)), [])


class AssetListConsistencyTests(unittest.TestCase):
    def test_without_chains(self) -> None:
        self.assertEqual(check_asset_list(AssetList.decode(initia_asset_list())), [])

    def test_duplicate_base(self) -> None:
        raw = initia_asset_list()
        raw['assets'].append(init_asset())

        issues = check_asset_list(AssetList.decode(raw))

        self.assertEqual(len(issues), 1)
        self.assertIn('duplicate base denom', issues[0].message)

    def test_cross_chain_references(self) -> None:
        raw = initia_asset_list()
        raw['assets'].append(yominet_init_asset())
        chains = ChainList.decode([initia_chain(), yominet_chain()])

        issues = check_asset_list(AssetList.decode(raw), chains)

        # USDC comes from noble, which is not in the chain list.
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].subject, f"asset:{usdc_asset()['base']}")
        self.assertIn('unknown chain noble', issues[0].message)
        self.assertEqual(issues[0].to_dict()['subject'], issues[0].subject)

    def test_owning_chain_unknown(self) -> None:
        raw = initia_asset_list()
        raw['assets'] = [init_asset()]
        chains = ChainList.decode([yominet_chain()])

        issues = check_asset_list(AssetList.decode(raw), chains)

        self.assertEqual([issue.subject for issue in issues], ['assetlist:initia'])
