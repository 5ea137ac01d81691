from __future__ import annotations

from collections.abc import Callable, Mapping
from concurrent.futures import Executor
from enum import Enum
from typing import Annotated, Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, StrictStr, Tag, TypeAdapter, ValidationError

from .errors import DecodeError, ElementError, TypeMismatch, from_validation_error, json_type_name

T = TypeVar('T')

UInt32 = Annotated[int, Field(strict=True, ge=0, le=0xFFFF_FFFF)]
UInt64 = Annotated[int, Field(strict=True, ge=0, le=0xFFFF_FFFF_FFFF_FFFF)]


def validate_with(adapter: TypeAdapter[T], raw: Any) -> T:
    try:
        return adapter.validate_python(raw, by_alias=True, by_name=False)
    except ValidationError as exc:
        raise from_validation_error(exc, raw) from exc


class RegistryModel(BaseModel):
    """Frozen base for every registry entity.

    Wire names are declared once as field aliases and used by both
    ``decode`` and ``encode``. Documents are decoded by wire name only;
    constructing a model in code accepts either name.
    """

    model_config = ConfigDict(frozen=True, validate_by_alias=True, validate_by_name=True)

    @classmethod
    def decode(cls, raw: Any):
        try:
            return cls.model_validate(raw, by_alias=True, by_name=False)
        except ValidationError as exc:
            raise from_validation_error(exc, raw) from exc

    def encode(self, *, emit_nulls: bool = False) -> dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=not emit_nulls)


class ImageFormat(str, Enum):
    PNG = 'png'
    SVG = 'svg'


IMAGE_KEYS = tuple(item.value for item in ImageFormat)


class PngImage(RegistryModel):
    model_config = ConfigDict(extra='forbid')

    png: StrictStr

    @property
    def format(self) -> ImageFormat:
        return ImageFormat.PNG

    @property
    def url(self) -> str:
        return self.png


class SvgImage(RegistryModel):
    model_config = ConfigDict(extra='forbid')

    svg: StrictStr

    @property
    def format(self) -> ImageFormat:
        return ImageFormat.SVG

    @property
    def url(self) -> str:
        return self.svg


def image_format(value: Any) -> str | None:
    if isinstance(value, (PngImage, SvgImage)):
        return value.format.value
    if not isinstance(value, Mapping) or not value:
        return None
    for key in value:
        if key in IMAGE_KEYS:
            return key
    return str(next(iter(value)))


ImageType = Annotated[
    Union[Annotated[PngImage, Tag(ImageFormat.PNG.value)], Annotated[SvgImage, Tag(ImageFormat.SVG.value)]],
    Discriminator(image_format)
]

_image_adapter: TypeAdapter[ImageType] = TypeAdapter(ImageType)


def decode_image(raw: Any) -> PngImage | SvgImage:
    return validate_with(_image_adapter, raw)


def decode_elements(
    decode: Callable[[Any], T],
    items: Any,
    *,
    field: str = '',
    executor: Executor | None = None
) -> tuple[T, ...]:
    if not isinstance(items, (list, tuple)):
        raise TypeMismatch(field, 'array', json_type_name(items))

    # Executor.map yields in submission order, so the first failure seen is the lowest index.
    results = iter(executor.map(decode, items) if executor is not None else map(decode, items))
    decoded: list[T] = []
    for index in range(len(items)):
        try:
            decoded.append(next(results))
        except DecodeError as exc:
            raise ElementError(index, exc) from exc
    return tuple(decoded)
