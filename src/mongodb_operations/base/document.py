# src/mongodb_operations/base/document.py

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, Tuple


class Document(Mapping):
    """
    Immutable, ordered, string-keyed document used as a MongoDB filter or
    update body.

    Field order is the order in which the entries were given. Values are kept
    as they are; nested containers are not copied or frozen. The driver is
    always handed a fresh dict through `to_dict()`, so it can never mutate
    the document itself.
    """

    __slots__ = ("_fields",)

    def __init__(self, entries: Iterable[Tuple[str, Any]] = ()):
        fields: Dict[str, Any] = {}
        for key, value in entries:
            if not isinstance(key, str):
                raise TypeError(
                    f"Document keys must be of type str, got '{type(key).__name__}'."
                )
            fields[key] = value
        object.__setattr__(self, "_fields", fields)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Document is immutable")

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            return self._fields == other._fields
        if isinstance(other, Mapping):
            return self._fields == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> Dict[str, Any]:
        """Return a new plain dict with the document fields, in order."""
        return dict(self._fields)

    def has_operators(self) -> bool:
        """True if any top-level key is a MongoDB `$` operator."""
        return any(key.startswith("$") for key in self._fields)

    def __repr__(self) -> str:
        return f"Document({self._fields!r})"
