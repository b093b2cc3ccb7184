import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from mongodb_operations.base.content import DataRow

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """
    Emptiness test shared by every source an update document can come from.

    Empty means:
    - None
    - str, bytes or bytearray containing only whitespace
    - Mapping, list, tuple, set or DataRow without entries

    Any other value (numbers, Pair, objects) is not empty.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bytes, bytearray)):
        # Classified as text, so blank bytes are blank text.
        return not bytes(value).strip()
    if isinstance(value, (Mapping, list, tuple, set, frozenset, DataRow)):
        # Pair is a tuple of two elements and therefore never empty.
        return len(value) == 0
    return False


def first_non_empty(sources: Iterable[Callable[[], Any]]) -> Optional[Any]:
    """
    Call each source in order and return the first non-empty value.

    Sources are evaluated lazily: once a value is found, the remaining
    sources are never called. Returns None when all of them are empty.
    """
    for source in sources:
        value = source()
        if not is_empty(value):
            return value
        logger.debug(f"Source {getattr(source, '__name__', source)!r} yielded an empty value")
    return None
