# src/mongodb_operations/base/content.py

"""
Structured content types a flow can carry in a message payload or produce
from an expression: a single key/value `Pair` and a named-column `DataRow`.
"""

from typing import Any, Dict, Iterator, List, NamedTuple, Sequence, Tuple


class Pair(NamedTuple):
    """A single key/value association."""

    left: Any
    right: Any


class DataRow:
    """
    A record of values addressed by column name, as produced by tabular
    sources (query results, CSV readers and so on).

    Column names are always strings; this is checked on construction so that
    consumers can rely on it.
    """

    __slots__ = ("_column_names", "_values")

    def __init__(self, column_names: Sequence[str], values: Sequence[Any]):
        if len(column_names) != len(values):
            raise ValueError(
                f"DataRow has {len(column_names)} column names but {len(values)} values."
            )
        for name in column_names:
            if not isinstance(name, str):
                raise TypeError(
                    f"DataRow column names must be of type str, got '{type(name).__name__}'."
                )
        self._column_names: Tuple[str, ...] = tuple(column_names)
        self._values: Tuple[Any, ...] = tuple(values)

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[str, Any]]) -> "DataRow":
        return cls([name for name, _ in pairs], [value for _, value in pairs])

    @property
    def column_names(self) -> List[str]:
        return list(self._column_names)

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    def get(self, column_name: str) -> Any:
        try:
            return self._values[self._column_names.index(column_name)]
        except ValueError:
            raise KeyError(column_name) from None

    def as_map(self) -> Dict[str, Any]:
        """Return the row as a column name -> value dict, in column order."""
        return dict(zip(self._column_names, self._values))

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(zip(self._column_names, self._values))

    def __len__(self) -> int:
        return len(self._column_names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataRow):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"DataRow({self.as_map()!r})"
