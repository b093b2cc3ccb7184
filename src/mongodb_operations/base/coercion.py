# src/mongodb_operations/base/coercion.py

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Type

import json5
from bson import json_util

from mongodb_operations.base.document import Document
from mongodb_operations.base.dynamic_value import (DynamicValue, MappingValue,
                                                   NoneValue, PairValue,
                                                   RowValue, TextValue,
                                                   classify, type_name)
from mongodb_operations.base.exceptions import (NonStringKeyError,
                                                UnsupportedTypeError)

logger = logging.getLogger(__name__)

QUERY_FILTER = "query filter"
UPDATE_DOCUMENT = "update document"


def _from_text(value: TextValue, target: str) -> Document:
    # Relaxed notation as in the mongo shell: unquoted keys, single quotes.
    # Extended JSON wrappers ($oid, $date, ...) are decoded into bson types.
    parsed = json5.loads(value.text, object_pairs_hook=json_util.object_pairs_hook)
    if not isinstance(parsed, Mapping):
        raise ValueError(
            f"The {target} text must contain a JSON object, "
            f"but it contained a value of type '{type_name(parsed)}'."
        )
    return Document(parsed.items())


def _from_mapping(value: MappingValue, target: str) -> Document:
    for key in value.entries:
        if not isinstance(key, str):
            raise NonStringKeyError(type_name(key))
    return Document(value.entries.items())


def _from_pair(value: PairValue, target: str) -> Document:
    left, right = value.pair
    if not isinstance(left, str):
        raise NonStringKeyError(type_name(left), is_pair=True)
    return Document([(left, right)])


def _from_row(value: RowValue, target: str) -> Document:
    return Document(value.row.items())


def _from_none(value: NoneValue, target: str) -> Document:
    raise UnsupportedTypeError(type_name(None), target)


_COERCERS: Dict[Type[Any], Callable[[Any, str], Document]] = {
    TextValue: _from_text,
    MappingValue: _from_mapping,
    PairValue: _from_pair,
    RowValue: _from_row,
    NoneValue: _from_none,
}


def coerce_value(value: DynamicValue, target: str = UPDATE_DOCUMENT) -> Document:
    """Build a Document from an already classified DynamicValue."""
    return _COERCERS[type(value)](value, target)


def coerce(value: Any, target: str = UPDATE_DOCUMENT) -> Document:
    """
    Convert a raw runtime value into a Document.

    Args:
        value: A str/bytes holding relaxed Extended JSON, a Mapping with str keys, a
            Pair with a str left element or a DataRow.
        target: What the document is used for. Only appears in error messages.

    Returns:
        A new Document.

    Raises:
        NonStringKeyError: A mapping key or the left element of a pair is not a str.
        UnsupportedTypeError: The value is None or of an unsupported type.
        ValueError: The text is not valid (relaxed) Extended JSON, is not a
            JSON object, or the bytes given are not valid UTF-8.
    """
    document = coerce_value(classify(value, target), target)
    logger.debug(f"Coerced {type_name(value)} into {target} {document!r}")
    return document
