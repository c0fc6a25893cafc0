"""
Graph Node Factory — Casts a decoded Graph response into nodes and edges.

Shape rules applied recursively:

  - an edge is ALWAYS a list of nodes found under a "data" key
  - a node is ALWAYS a JSON object
  - a node MAY contain nodes, edges, datetimes and other primitives
  - an object whose "data" key holds an object (not a list) is a node: the
    inner object is merged over the outer keys
  - a bare JSON array inside a node becomes a tuple of cast items

Nested objects are cast as the type named in the parent's graph_object_map,
or as a plain GraphNode.
"""

from typing import Any, Dict, List, Optional, Type, Union

from ..exceptions import SDKException
from .graph_edge import GraphEdge
from .graph_node import GraphNode, resolve_node_type
from .node_types import (
    GraphAchievement,
    GraphAlbum,
    GraphEvent,
    GraphGroup,
    GraphPage,
    GraphSessionInfo,
    GraphUser,
)


class GraphNodeFactory:
    """Builds GraphNode/GraphEdge objects from a GraphResponse."""

    def __init__(self, response):
        self.response = response
        self.decoded_body = response.decoded_body

    def make_graph_node(self, subclass: Any = None) -> GraphNode:
        """Cast the response as a node.

        Raises:
            SDKException: (620) when the body is not an object or looks like an edge.
        """
        self.validate_response_as_array()
        self.validate_response_castable_as_graph_node()

        return self.cast_as_graph_node_or_graph_edge(self.decoded_body, subclass)

    def make_graph_edge(self, subclass: Any = None) -> GraphEdge:
        """Cast the response as an edge.

        Raises:
            SDKException: (620) when the body has no list under "data".
        """
        self.validate_response_as_array()
        self.validate_response_castable_as_graph_edge()

        return self.cast_as_graph_node_or_graph_edge(self.decoded_body, subclass)

    def make_graph_achievement(self) -> GraphAchievement:
        return self.make_graph_node(GraphAchievement)

    def make_graph_album(self) -> GraphAlbum:
        return self.make_graph_node(GraphAlbum)

    def make_graph_page(self) -> GraphPage:
        return self.make_graph_node(GraphPage)

    def make_graph_session_info(self) -> GraphSessionInfo:
        return self.make_graph_node(GraphSessionInfo)

    def make_graph_user(self) -> GraphUser:
        return self.make_graph_node(GraphUser)

    def make_graph_event(self) -> GraphEvent:
        return self.make_graph_node(GraphEvent)

    def make_graph_group(self) -> GraphGroup:
        return self.make_graph_node(GraphGroup)

    def validate_response_as_array(self) -> None:
        if not isinstance(self.decoded_body, dict):
            raise SDKException("Unable to get response from Graph as array.", 620)

    def validate_response_castable_as_graph_node(self) -> None:
        data = self.decoded_body.get("data")
        if data is not None and self.is_castable_as_graph_edge(data):
            raise SDKException(
                "Unable to convert response from Graph to a GraphNode because the "
                "response looks like a GraphEdge. Try using make_graph_edge() instead.",
                620,
            )

    def validate_response_castable_as_graph_edge(self) -> None:
        data = self.decoded_body.get("data")
        if not (data is not None and self.is_castable_as_graph_edge(data)):
            raise SDKException(
                "Unable to convert response from Graph to a GraphEdge because the "
                "response does not look like a GraphEdge. Try using make_graph_node() instead.",
                620,
            )

    @staticmethod
    def is_castable_as_graph_edge(data: Any) -> bool:
        """Lists and empty objects are edge data."""
        if isinstance(data, (list, tuple)):
            return True
        return isinstance(data, dict) and not data

    @staticmethod
    def validate_subclass(subclass: Any) -> Type[GraphNode]:
        return resolve_node_type(subclass)

    @staticmethod
    def get_meta_data(data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k != "data"}

    def cast_as_graph_node_or_graph_edge(
        self,
        data: Dict[str, Any],
        subclass: Any = None,
        parent_key: Optional[str] = None,
        parent_node_id: Optional[str] = None,
    ) -> Union[GraphNode, GraphEdge]:
        inner = data.get("data")
        if isinstance(inner, (dict, list)):
            if self.is_castable_as_graph_edge(inner):
                return self.safely_make_graph_edge(data, subclass, parent_key, parent_node_id)

            # A node returned under "data"
            merged = dict(inner)
            for key, value in data.items():
                if key != "data":
                    merged.setdefault(key, value)
            data = merged

        return self.safely_make_graph_node(data, subclass)

    def safely_make_graph_edge(
        self,
        data: Dict[str, Any],
        subclass: Any = None,
        parent_key: Optional[str] = None,
        parent_node_id: Optional[str] = None,
    ) -> GraphEdge:
        if data.get("data") is None:
            raise SDKException('Cannot cast data to GraphEdge. Expected a "data" key.', 620)

        items = []
        for node in data["data"]:
            if isinstance(node, dict):
                items.append(self.safely_make_graph_node(node, subclass))
            else:
                items.append(node)

        parent_edge_endpoint = None
        if parent_node_id and parent_key:
            parent_edge_endpoint = f"/{parent_node_id}/{parent_key}"

        return GraphEdge(
            self.response.request,
            items,
            self.get_meta_data(data),
            parent_edge_endpoint,
            subclass,
        )

    def safely_make_graph_node(self, data: Dict[str, Any], subclass: Any = None) -> GraphNode:
        node_type = self.validate_subclass(subclass)

        # Nested edges paginate from /{parent_id}/{field}
        parent_node_id = data.get("id")
        object_map = node_type.get_object_map()

        items = {}
        for key, value in data.items():
            if isinstance(value, dict):
                items[key] = self.cast_as_graph_node_or_graph_edge(
                    value, object_map.get(key), key, parent_node_id
                )
            elif isinstance(value, list):
                items[key] = self._cast_list(value, object_map.get(key), key, parent_node_id)
            else:
                items[key] = value

        return node_type(items)

    def _cast_list(
        self,
        values: List[Any],
        subclass: Any,
        parent_key: Optional[str],
        parent_node_id: Optional[str],
    ) -> tuple:
        cast = []
        for value in values:
            if isinstance(value, dict):
                cast.append(
                    self.cast_as_graph_node_or_graph_edge(value, subclass, parent_key, parent_node_id)
                )
            elif isinstance(value, list):
                cast.append(self._cast_list(value, subclass, parent_key, parent_node_id))
            else:
                cast.append(value)
        return tuple(cast)
