"""
Collection — Read-only container shared by GraphNode and GraphEdge.
"""

import json
from typing import Any, Callable, Iterator, List


class Collection:
    """Holds the cast items of a node (a dict) or an edge (a list)."""

    def __init__(self, items: Any = None):
        self._items = items if items is not None else {}

    def get_field(self, name: Any, default: Any = None) -> Any:
        """Return the value of a field, or default when missing or None."""
        try:
            value = self._items[name]
        except (KeyError, IndexError, TypeError):
            return default
        return default if value is None else value

    @property
    def field_names(self) -> List[Any]:
        if isinstance(self._items, dict):
            return list(self._items.keys())
        return list(range(len(self._items)))

    def all(self) -> Any:
        """A shallow copy of the underlying items."""
        return self._items.copy()

    def map(self, callback: Callable[[Any, Any], Any]) -> "Collection":
        """Apply callback(value, key) to every item and return a new collection."""
        if isinstance(self._items, dict):
            return type(self)({k: callback(v, k) for k, v in self._items.items()})
        return type(self)([callback(v, i) for i, v in enumerate(self._items)])

    def as_array(self) -> Any:
        """Plain dicts/lists all the way down."""
        if isinstance(self._items, dict):
            return {k: _to_plain(v) for k, v in self._items.items()}
        return [_to_plain(v) for v in self._items]

    def as_json(self, **kwargs) -> str:
        return json.dumps(self.as_array(), default=str, **kwargs)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, key: Any) -> Any:
        return self._items[key]

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return type(self) is type(other) and self._items == other._items
        return NotImplemented

    __hash__ = None

    def __str__(self) -> str:
        return self.as_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


def _to_plain(value: Any) -> Any:
    if isinstance(value, Collection):
        return value.as_array()
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value
