"""
Graph Edge — A page of nodes plus the paging metadata Graph returned with it.

    {
      "data": [{"id": "1"}, {"id": "2"}],
      "paging": {
        "cursors": {"before": "MTA=", "after": "MjA="},
        "next": "https://graph.facebook.com/v15.0/123/photos?after=MjA="
      },
      "summary": {"total_count": 42}
    }

Everything but "data" is kept as meta_data. Pagination requests are clones
of the request that produced the edge with the endpoint swapped for the
"next"/"previous" URL.
"""

import json
from collections.abc import Sequence
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import SDKException
from ..type_mapping import map_type
from ..url_manipulator import base_graph_url_endpoint
from .collection import Collection
from .graph_node import uncast_value


class GraphEdge(Collection, Sequence):
    """A read-only sequence of GraphNodes.

    Attributes:
        request: The GraphRequest that returned this edge.
        meta_data: Everything in the response besides "data".
        parent_graph_edge: "/{parent_id}/{field}" when the edge was nested in a node.
    """

    def __init__(
        self,
        request,
        data: Optional[List[Any]] = None,
        meta_data: Optional[Dict[str, Any]] = None,
        parent_edge_endpoint: Optional[str] = None,
        subclass_name: Any = None,
    ):
        super().__init__(list(data or []))
        self.request = request
        self.meta_data = meta_data or {}
        self.parent_graph_edge = parent_edge_endpoint
        self._subclass = subclass_name

    @property
    def subclass_name(self) -> Optional[str]:
        """Name of the node type the items were cast as."""
        if self._subclass is None:
            return None
        return getattr(self._subclass, "__name__", self._subclass)

    def get_cursor(self, direction: str) -> Optional[str]:
        cursors = self.meta_data.get("paging", {}).get("cursors", {})
        if cursors.get(direction) is None:
            return None
        return map_type(cursors[direction], "str")

    @property
    def next_cursor(self) -> Optional[str]:
        return self.get_cursor("after")

    @property
    def previous_cursor(self) -> Optional[str]:
        return self.get_cursor("before")

    def validate_for_pagination(self) -> None:
        if self.request.method != "GET":
            raise SDKException("You can only paginate on a GET request.", 720)

    def get_pagination_url(self, direction: str) -> Optional[str]:
        """Endpoint for the next|previous page, or None when there is none."""
        self.validate_for_pagination()

        page_url = map_type(self.meta_data.get("paging", {}).get(direction), "str")
        if not page_url:
            return None

        return base_graph_url_endpoint(page_url)

    def get_pagination_request(self, direction: str):
        page_url = self.get_pagination_url(direction)
        if not page_url:
            return None

        new_request = self.request.clone()
        new_request.endpoint = page_url
        return new_request

    @property
    def next_page_request(self):
        return self.get_pagination_request("next")

    @property
    def previous_page_request(self):
        return self.get_pagination_request("previous")

    @property
    def total_count(self) -> Optional[int]:
        """summary.total_count, present when summary=true was requested."""
        summary = self.meta_data.get("summary")
        if not isinstance(summary, dict) or summary.get("total_count") is None:
            return None
        return map_type(summary["total_count"], "int")

    def map(self, callback: Callable[[Any, int], Any]) -> "GraphEdge":
        return type(self)(
            self.request,
            [callback(v, i) for i, v in enumerate(self._items)],
            self.meta_data,
            self.parent_graph_edge,
            self._subclass,
        )

    def uncast_items(self) -> List[Any]:
        return [uncast_value(v) for v in self._items]

    def as_json(self, **kwargs) -> str:
        return json.dumps(self.uncast_items(), **kwargs)

    def __repr__(self) -> str:
        return f"GraphEdge({self._items!r}, meta_data={self.meta_data!r})"
