from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import Executor
from typing import Any

from pydantic import ConfigDict, Field, RootModel, StrictBool, StrictStr

from .common import RegistryModel, decode_elements


class VipAction(RegistryModel):
    title: StrictStr
    description: StrictStr


class Vip(RegistryModel):
    forum_url: StrictStr
    actions: tuple[VipAction, ...]


class Social(RegistryModel):
    website: StrictStr
    twitter: StrictStr


class Profile(RegistryModel):
    schema_uri: StrictStr | None = Field(default=None, alias='$schema')
    name: StrictStr
    pretty_name: StrictStr
    category: StrictStr
    tags: tuple[StrictStr, ...] = ()
    l2: StrictBool | None = None
    description: StrictStr
    summary: StrictStr | None = None
    logo: StrictStr
    color: StrictStr
    status: StrictStr
    vip: Vip | None = None
    social: Social


class ProfileList(RootModel[tuple[Profile, ...]]):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def decode(cls, raw: Any, *, executor: Executor | None = None) -> ProfileList:
        return cls(decode_elements(Profile.decode, raw, executor=executor))

    def encode(self, *, emit_nulls: bool = False) -> list[dict[str, Any]]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=not emit_nulls)

    def __iter__(self) -> Iterator[Profile]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Profile:
        return self.root[index]

    def by_category(self, category: str) -> tuple[Profile, ...]:
        return tuple(profile for profile in self.root if profile.category == category)
