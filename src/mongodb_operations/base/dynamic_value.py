# src/mongodb_operations/base/dynamic_value.py

"""
Tagged representation of the runtime values accepted as documents.

A raw value coming from an expression or a message payload is classified
once into exactly one of the variants below. The set is closed: anything
that is not one of these shapes is rejected by `classify`.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from mongodb_operations.base.content import DataRow, Pair
from mongodb_operations.base.exceptions import UnsupportedTypeError


@dataclass(frozen=True)
class TextValue:
    """Serialized document notation (Extended JSON)."""

    text: str


@dataclass(frozen=True)
class MappingValue:
    entries: Mapping


@dataclass(frozen=True)
class PairValue:
    pair: Pair


@dataclass(frozen=True)
class RowValue:
    row: DataRow


@dataclass(frozen=True)
class NoneValue:
    """No value: the expression was not configured or produced nothing."""


DynamicValue = Union[TextValue, MappingValue, PairValue, RowValue, NoneValue]


def type_name(value: Any) -> str:
    return type(value).__name__


def classify(value: Any, target: str = "document") -> DynamicValue:
    """
    Wrap a raw runtime value into its DynamicValue variant.

    `str` is text and so is `bytes`/`bytearray`, decoded as UTF-8. Pair and
    DataRow are checked before the generic Mapping test so that a custom
    mapping-like row type is never mistaken for a plain map.

    Raises:
        UnsupportedTypeError: the value has none of the supported shapes.
        ValueError: the value is bytes that are not valid UTF-8.
    """
    if value is None:
        return NoneValue()
    if isinstance(value, str):
        return TextValue(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return TextValue(bytes(value).decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ValueError(f"The {target} bytes are not valid UTF-8 text: {e}") from e
    if isinstance(value, Pair):
        return PairValue(value)
    if isinstance(value, DataRow):
        return RowValue(value)
    if isinstance(value, Mapping):
        return MappingValue(value)
    raise UnsupportedTypeError(type_name(value), target)
