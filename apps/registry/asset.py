from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import Executor
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, StrictStr, TypeAdapter

from .common import ImageType, RegistryModel, UInt32, decode_elements, validate_with


class TraceKind(str, Enum):
    OP = 'op'
    IBC = 'ibc'
    WRAPPED = 'wrapped'


class DenomUnit(RegistryModel):
    denom: StrictStr
    exponent: UInt32


class _Hop(RegistryModel):
    @property
    def kind(self) -> TraceKind:
        return TraceKind(self.type)

    @property
    def chain_name(self) -> str:
        return self.counterparty.chain_name

    @property
    def base_denom(self) -> str:
        return self.counterparty.base_denom


class OpCounterparty(RegistryModel):
    chain_name: StrictStr
    base_denom: StrictStr


class OpChain(RegistryModel):
    bridge_id: StrictStr


class OpTrace(_Hop):
    type: Literal['op'] = 'op'
    counterparty: OpCounterparty
    chain: OpChain


class IbcCounterparty(RegistryModel):
    chain_name: StrictStr
    base_denom: StrictStr
    channel_id: StrictStr


class IbcTraceChain(RegistryModel):
    channel_id: StrictStr
    path: StrictStr


class IbcTrace(_Hop):
    type: Literal['ibc'] = 'ibc'
    counterparty: IbcCounterparty
    chain: IbcTraceChain


class WrappedCounterparty(RegistryModel):
    chain_name: StrictStr
    base_denom: StrictStr


class WrappedChain(RegistryModel):
    contract: StrictStr


class WrappedTrace(_Hop):
    type: Literal['wrapped'] = 'wrapped'
    counterparty: WrappedCounterparty
    chain: WrappedChain
    provider: StrictStr


Trace = Annotated[Union[OpTrace, IbcTrace, WrappedTrace], Field(discriminator='type')]

_trace_adapter: TypeAdapter[Trace] = TypeAdapter(Trace)


def decode_trace(raw: Any) -> OpTrace | IbcTrace | WrappedTrace:
    return validate_with(_trace_adapter, raw)


def local_reference(trace: OpTrace | IbcTrace | WrappedTrace) -> str:
    """Identifier of the hop on the receiving chain: bridge id, IBC path or wrapping contract."""
    match trace.kind:
        case TraceKind.OP:
            return trace.chain.bridge_id
        case TraceKind.IBC:
            return trace.chain.path
        case TraceKind.WRAPPED:
            return trace.chain.contract
    raise ValueError(f'unhandled trace kind {trace.kind!r}')


class Asset(RegistryModel):
    description: StrictStr
    denom_units: tuple[DenomUnit, ...]
    base: StrictStr
    display: StrictStr
    name: StrictStr
    symbol: StrictStr
    coingecko_id: StrictStr | None = None
    type_asset: StrictStr | None = None
    images: tuple[ImageType, ...] = ()
    logo_uris: ImageType = Field(alias='logo_URIs')
    traces: tuple[Trace, ...] = ()

    @property
    def is_native(self) -> bool:
        return not self.traces

    @property
    def origin(self) -> OpTrace | IbcTrace | WrappedTrace | None:
        # Hops are recorded from the origin chain towards this one.
        return self.traces[0] if self.traces else None

    @property
    def display_unit(self) -> DenomUnit | None:
        return self.denom_unit(self.display)

    def denom_unit(self, denom: str) -> DenomUnit | None:
        for unit in self.denom_units:
            if unit.denom == denom:
                return unit
        return None


class AssetList(RegistryModel):
    schema_uri: StrictStr = Field(alias='$schema')
    chain_name: StrictStr
    assets: tuple[Asset, ...]

    @classmethod
    def decode(cls, raw: Any, *, executor: Executor | None = None) -> AssetList:
        if not isinstance(raw, Mapping) or 'assets' not in raw:
            return super().decode(raw)

        header = super().decode({**raw, 'assets': ()})
        assets = decode_elements(Asset.decode, raw['assets'], field='assets', executor=executor)
        return header.model_copy(update={'assets': assets})

    def find(self, key: str) -> Asset | None:
        """Look an asset up by base denom, then by symbol."""
        for asset in self.assets:
            if asset.base == key:
                return asset
        for asset in self.assets:
            if asset.symbol == key:
                return asset
        return None
