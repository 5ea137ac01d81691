from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import Executor
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, RootModel, StrictBool, StrictFloat, StrictStr

from .common import ImageType, RegistryModel, UInt32, UInt64, decode_elements


class FeeToken(RegistryModel):
    denom: StrictStr
    fixed_min_gas_price: StrictFloat | None = None
    low_gas_price: StrictFloat | None = None
    average_gas_price: StrictFloat | None = None
    high_gas_price: StrictFloat | None = None


class Fees(RegistryModel):
    fee_tokens: tuple[FeeToken, ...]


class Endpoint(RegistryModel):
    address: StrictStr
    provider: StrictStr | None = None
    authorized_user: StrictStr | None = Field(default=None, alias='authorizedUser')


class Apis(RegistryModel):
    rpc: tuple[Endpoint, ...] = ()
    rest: tuple[Endpoint, ...] = ()
    api: tuple[Endpoint, ...] = ()
    grpc: tuple[Endpoint, ...] = ()
    json_rpc: tuple[Endpoint, ...] = Field(default=(), alias='json-rpc')
    json_rpc_websocket: tuple[Endpoint, ...] = Field(default=(), alias='json-rpc-websocket')


class Explorer(RegistryModel):
    kind: StrictStr
    url: StrictStr
    # Both pages are URL templates with placeholders; kept verbatim.
    tx_page: StrictStr
    account_page: StrictStr


class IbcChannel(RegistryModel):
    chain_id: StrictStr
    channel_id: StrictStr
    port_id: StrictStr
    version: StrictStr


class MinitiaType(str, Enum):
    MINI_EVM = 'minievm'
    MINI_MOVE = 'minimove'
    MINI_WASM = 'miniwasm'


class Minitia(RegistryModel):
    type: MinitiaType
    version: StrictStr


class Metadata(RegistryModel):
    op_bridge_id: StrictStr | None = None
    op_denoms: tuple[StrictStr, ...] = ()
    executor_uri: StrictStr | None = None
    assetlist: StrictStr | None = None
    is_l1: StrictBool | None = None
    ibc_channels: tuple[IbcChannel, ...] = ()
    minitia: Minitia | None = None


class Chain(RegistryModel):
    chain_id: StrictStr
    chain_name: StrictStr
    pretty_name: StrictStr
    description: StrictStr
    website: StrictStr
    fees: Fees
    apis: Apis
    explorers: tuple[Explorer, ...]
    metadata: Metadata
    logo_uris: ImageType = Field(alias='logo_URIs')
    slip44: UInt32
    bech32_prefix: StrictStr
    network_type: StrictStr
    evm_chain_id: UInt64 | None = None

    @property
    def is_rollup(self) -> bool:
        return self.metadata.minitia is not None

    def fee_token(self, denom: str) -> FeeToken | None:
        for token in self.fees.fee_tokens:
            if token.denom == denom:
                return token
        return None


class ChainList(RootModel[tuple[Chain, ...]]):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def decode(cls, raw: Any, *, executor: Executor | None = None) -> ChainList:
        return cls(decode_elements(Chain.decode, raw, executor=executor))

    def encode(self, *, emit_nulls: bool = False) -> list[dict[str, Any]]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=not emit_nulls)

    def __iter__(self) -> Iterator[Chain]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Chain:
        return self.root[index]

    def by_name(self, chain_name: str) -> Chain | None:
        for chain in self.root:
            if chain.chain_name == chain_name:
                return chain
        return None

    def by_chain_id(self, chain_id: str) -> Chain | None:
        for chain in self.root:
            if chain.chain_id == chain_id:
                return chain
        return None
