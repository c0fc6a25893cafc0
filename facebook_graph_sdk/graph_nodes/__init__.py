"""
graph_nodes — Typed, read-only views of Graph responses.

Modules:
  collection  — Collection base (field access, as_array/as_json, map)
  graph_node  — GraphNode mapping with date/birthday/token casting
  graph_edge  — GraphEdge sequence with cursors and pagination requests
  birthday    — Birthday date with has_date/has_year
  node_types  — GraphUser, GraphPage, GraphAlbum, GraphEvent, ...
  factory     — GraphNodeFactory casting engine
"""

from .birthday import Birthday
from .collection import Collection
from .factory import GraphNodeFactory
from .graph_edge import GraphEdge
from .graph_node import GraphNode, resolve_node_type
from .node_types import (
    GraphAchievement,
    GraphAlbum,
    GraphApplication,
    GraphCoverPhoto,
    GraphEvent,
    GraphGroup,
    GraphLocation,
    GraphPage,
    GraphPicture,
    GraphSessionInfo,
    GraphUser,
)

__all__ = [
    "Birthday",
    "Collection",
    "GraphAchievement",
    "GraphAlbum",
    "GraphApplication",
    "GraphCoverPhoto",
    "GraphEdge",
    "GraphEvent",
    "GraphGroup",
    "GraphLocation",
    "GraphNode",
    "GraphNodeFactory",
    "GraphPage",
    "GraphPicture",
    "GraphSessionInfo",
    "GraphUser",
    "resolve_node_type",
]
