"""Semantic properties of registry entries that decoding does not enforce.

Each check returns a list of issues; an empty list means the entry is
consistent. Nothing here raises for an inconsistent entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from .asset import Asset, AssetList
from .chain import Chain, ChainList


@dataclass(frozen=True)
class Issue:
    subject: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {'subject': self.subject, 'message': self.message}


def check_asset(asset: Asset) -> list[Issue]:
    issues: list[Issue] = []
    subject = f'asset:{asset.base}'
    if asset.denom_unit(asset.base) is None:
        issues.append(Issue(subject, f'base denom {asset.base} is not listed in denom_units'))
    if asset.display_unit is None:
        issues.append(Issue(subject, f'display denom {asset.display} is not listed in denom_units'))
    return issues


def check_chain(chain: Chain) -> list[Issue]:
    issues: list[Issue] = []
    minitia = chain.metadata.minitia
    if minitia is not None and chain.metadata.is_l1:
        issues.append(
            Issue(
                f'chain:{chain.chain_name}',
                f'{minitia.type.value} rollup is marked as is_l1'
            )
        )
    return issues


def check_asset_list(asset_list: AssetList, chains: ChainList | None = None) -> list[Issue]:
    issues: list[Issue] = []
    seen: set[str] = set()
    for asset in asset_list.assets:
        issues.extend(check_asset(asset))
        if asset.base in seen:
            issues.append(Issue(f'asset:{asset.base}', f'duplicate base denom in {asset_list.chain_name} assetlist'))
        seen.add(asset.base)

    if chains is None:
        return issues

    if chains.by_name(asset_list.chain_name) is None:
        issues.append(Issue(f'assetlist:{asset_list.chain_name}', 'owning chain is not in the chain list'))

    for asset in asset_list.assets:
        for position, trace in enumerate(asset.traces):
            if chains.by_name(trace.chain_name) is None:
                issues.append(
                    Issue(
                        f'asset:{asset.base}',
                        f'trace {position} ({trace.kind.value}) names unknown chain {trace.chain_name}'
                    )
                )
    return issues
