from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

# Callable discriminators report their function name; map it to the wire keys it selects on.
_KEYED_UNIONS = {'image_format': ('png', 'svg')}

_EXPECTED_BY_ERROR_TYPE = {
    'string_type': 'string',
    'int_type': 'integer',
    'float_type': 'number',
    'bool_type': 'boolean',
    'list_type': 'array',
    'tuple_type': 'array',
    'dict_type': 'object',
    'model_type': 'object',
    'model_attributes_type': 'object',
    'extra_forbidden': 'no additional keys'
}

_VARIANT_ERROR_TYPES = {'enum', 'literal_error'}


class DecodeError(Exception):
    code = 'decode_error'

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {'error': self.code, 'detail': self.detail}


class FieldMissing(DecodeError):
    code = 'field_missing'

    def __init__(self, field: str, detail: str | None = None) -> None:
        super().__init__(detail or f'missing required field {_display(field)}')
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), 'field': self.field}


class TypeMismatch(DecodeError):
    code = 'type_mismatch'

    def __init__(self, field: str, expected: str, actual: str) -> None:
        super().__init__(f'field {_display(field)} expected {expected}, got {actual}')
        self.field = field
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), 'field': self.field, 'expected': self.expected, 'actual': self.actual}


class UnknownVariant(DecodeError):
    code = 'unknown_variant'

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f'unknown variant {value!r} for {_display(field)}')
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), 'field': self.field, 'value': self.value}


class ElementError(DecodeError):
    """Failure of one element of a list document.

    ``index`` is the position of the failing element in the input sequence and
    ``inner`` the error raised while decoding it.
    """

    code = 'element_error'

    def __init__(self, index: int, inner: DecodeError) -> None:
        super().__init__(f'element {index}: {inner.detail}')
        self.index = index
        self.inner = inner

    @property
    def root_cause(self) -> DecodeError:
        cause: DecodeError = self.inner
        while isinstance(cause, ElementError):
            cause = cause.inner
        return cause

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), 'index': self.index, 'inner': self.inner.to_dict()}


def _display(field: str) -> str:
    return repr(field) if field else '<document>'


def json_type_name(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (list, tuple)):
        return 'array'
    if isinstance(value, (Mapping, BaseModel)):
        return 'object'
    return type(value).__name__


def join_path(*parts: Any) -> str:
    return '.'.join(str(part) for part in parts if part != '')


def _is_union_tag(node: Any, segment: Any, following: tuple[Any, ...]) -> bool:
    if not isinstance(node, Mapping) or not isinstance(segment, str):
        return False
    if segment not in node and node.get('type') == segment:
        return True
    # Keyed unions repeat their tag: ('png', 'png') or ('png', 'svg') for a second key.
    keys = {key for tags in _KEYED_UNIONS.values() for key in tags}
    return segment in keys and bool(following) and following[0] in node


def wire_path(loc: tuple[Any, ...], raw: Any) -> str:
    """Dotted wire path of an error location, without the tags pydantic adds for unions.

    The location is replayed against the raw input so a tag is only dropped
    where the input actually selected that variant.
    """
    parts: list[Any] = []
    node = raw
    for position, segment in enumerate(loc):
        if _is_union_tag(node, segment, loc[position + 1:]):
            continue
        parts.append(segment)
        if isinstance(node, Mapping):
            node = node.get(segment)
        elif isinstance(node, (list, tuple)) and isinstance(segment, int) and 0 <= segment < len(node):
            node = node[segment]
        else:
            node = None
    return join_path(*parts)


def _tag_field(ctx: Mapping[str, Any]) -> str:
    name = str(ctx.get('discriminator', '')).strip("'")
    if name.endswith('()'):
        name = name[:-2]
    return name


def _expected(error: Mapping[str, Any]) -> str:
    error_type = error['type']
    ctx = error.get('ctx') or {}
    if error_type == 'greater_than_equal':
        return f"integer >= {ctx.get('ge')}"
    if error_type == 'less_than_equal':
        return f"integer <= {ctx.get('le')}"
    return _EXPECTED_BY_ERROR_TYPE.get(error_type, str(error.get('msg', error_type)))


def from_validation_error(exc: ValidationError, raw: Any = None) -> DecodeError:
    """Reduce a pydantic validation failure to its first root cause.

    ``raw`` is the decoded input; it is needed to map locations inside
    tagged unions back to wire keys.
    """
    error = exc.errors(include_url=False)[0]
    error_type = error['type']
    path = wire_path(tuple(error['loc']), raw)
    ctx = error.get('ctx') or {}
    value = error.get('input')

    if error_type == 'missing':
        return FieldMissing(path)

    if error_type == 'union_tag_not_found':
        if not isinstance(value, (Mapping, BaseModel)):
            return TypeMismatch(path, 'object', json_type_name(value))
        tag_field = _tag_field(ctx)
        if tag_field in _KEYED_UNIONS:
            keys = ' or '.join(repr(key) for key in _KEYED_UNIONS[tag_field])
            return FieldMissing(path, f'{_display(path)} needs one of the keys {keys}')
        return FieldMissing(join_path(path, tag_field))

    if error_type == 'union_tag_invalid':
        tag_field = _tag_field(ctx)
        # Keyed unions carry the tag as the key itself.
        field = path if tag_field in _KEYED_UNIONS else join_path(path, tag_field)
        return UnknownVariant(field, ctx.get('tag'))

    if error_type in _VARIANT_ERROR_TYPES:
        return UnknownVariant(path, value)

    return TypeMismatch(path, _expected(error), json_type_name(value))
