"""
Graph Node — A single Graph object with its known fields auto-cast.

On construction a GraphNode converts:

  - date fields (created_time, updated_time, ...) holding a unix timestamp
    or an ISO 8601 string into timezone-aware datetimes
  - "birthday" into a Birthday
  - "access_token" into an AccessToken

uncast_items() reverses these so the node can be serialized back to JSON.

Subclasses declare graph_object_map (field name -> node type name) to tell
GraphNodeFactory which type nested objects should be cast as. Type names
are resolved through a registry every GraphNode subclass joins on creation,
so a map may name types defined later in the module.
"""

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, Union

import iso8601

from ..access_token import AccessToken
from ..exceptions import SDKException
from ..type_mapping import is_numeric
from .birthday import Birthday
from .collection import Collection

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

DATE_FIELDS = frozenset({
    "created_time",
    "updated_time",
    "start_time",
    "end_time",
    "backdated_time",
    "issued_at",
    "expires_at",
    "publish_time",
    "joined",
})


def is_iso8601_date_string(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        iso8601.parse_date(value)
    except iso8601.ParseError:
        return False
    return True


def cast_to_datetime(value: Union[int, float, str]) -> datetime:
    """Numbers (and numeric strings) are unix timestamps, anything else ISO 8601."""
    if is_numeric(value):
        return datetime.fromtimestamp(float(value), timezone.utc)
    return iso8601.parse_date(value)


def uncast_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.strftime(ISO8601_FORMAT)
    if isinstance(value, Birthday):
        return value.raw
    if isinstance(value, AccessToken):
        return value.value
    if isinstance(value, Collection):
        return value.uncast_items()
    if isinstance(value, (list, tuple)):
        return [uncast_value(v) for v in value]
    return value


class GraphNode(Collection, Mapping):
    """A read-only mapping of Graph fields."""

    graph_object_map: Dict[str, str] = {}

    _types: Dict[str, Type["GraphNode"]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        GraphNode._types[cls.__name__] = cls

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        super().__init__(self.cast_items(data or {}))

    @classmethod
    def get_object_map(cls) -> Dict[str, str]:
        return cls.graph_object_map

    @staticmethod
    def should_cast_as_datetime(key: str) -> bool:
        return key in DATE_FIELDS

    def cast_items(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Cast dates, birthdays and tokens. Values that do not parse stay raw."""
        items = {}
        for key, value in data.items():
            try:
                items[key] = self.cast_item(key, value)
            except (ValueError, OverflowError, OSError):
                items[key] = value
        return items

    def cast_item(self, key: str, value: Any) -> Any:
        if self.should_cast_as_datetime(key) and (
            is_numeric(value) or is_iso8601_date_string(value)
        ):
            return cast_to_datetime(value)
        if key == "birthday" and isinstance(value, str):
            return Birthday(value)
        if key == "access_token" and isinstance(value, str):
            return AccessToken(value)
        return value

    def uncast_items(self) -> Dict[str, Any]:
        return {k: uncast_value(v) for k, v in self._items.items()}

    def as_json(self, **kwargs) -> str:
        return json.dumps(self.uncast_items(), **kwargs)


GraphNode._types["GraphNode"] = GraphNode


def resolve_node_type(subclass: Any = None) -> Type[GraphNode]:
    """Turn a node type name (or class, or None) into a GraphNode class.

    Raises:
        SDKException: (620) when subclass is not a GraphNode type.
    """
    if subclass is None:
        return GraphNode

    if isinstance(subclass, str):
        name = subclass.rsplit(".", 1)[-1].rsplit("\\", 1)[-1]
        node_type = GraphNode._types.get(name)
        if node_type is not None:
            return node_type
    elif isinstance(subclass, type) and issubclass(subclass, GraphNode):
        return subclass

    raise SDKException(
        f'The given subclass "{subclass}" is not valid. '
        "Cannot cast to an object that is not a GraphNode subclass.",
        620,
    )
