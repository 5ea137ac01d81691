from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor
from typing import Any

from .asset import Asset, AssetList, DenomUnit, decode_trace
from .chain import Chain, ChainList, Minitia
from .common import RegistryModel, decode_image
from .profile import Profile, ProfileList

DOCUMENT_KINDS: dict[str, Callable[..., Any]] = {
    'asset': Asset.decode,
    'assetlist': AssetList.decode,
    'chain': Chain.decode,
    'chainlist': ChainList.decode,
    'profile': Profile.decode,
    'profilelist': ProfileList.decode,
    'trace': decode_trace,
    'image': decode_image,
    'minitia': Minitia.decode,
    'denom_unit': DenomUnit.decode
}

LIST_KINDS = frozenset({'assetlist', 'chainlist', 'profilelist'})


class UnknownDocumentKind(KeyError):
    def __init__(self, kind: str) -> None:
        super().__init__(kind)
        self.kind = kind

    def __str__(self) -> str:
        return f'unknown document kind {self.kind!r}; expected one of {", ".join(sorted(DOCUMENT_KINDS))}'


def decode_document(kind: str, raw: Any, *, executor: Executor | None = None) -> Any:
    try:
        decoder = DOCUMENT_KINDS[kind]
    except KeyError:
        raise UnknownDocumentKind(kind) from None

    if kind in LIST_KINDS:
        return decoder(raw, executor=executor)
    return decoder(raw)


def encode_document(value: RegistryModel | ChainList | ProfileList, *, emit_nulls: bool = False) -> Any:
    return value.encode(emit_nulls=emit_nulls)


def canonicalize(kind: str, raw: Any, *, emit_nulls: bool = False, executor: Executor | None = None) -> Any:
    return encode_document(decode_document(kind, raw, executor=executor), emit_nulls=emit_nulls)
