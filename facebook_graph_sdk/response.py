"""
Graph Response — Decoded result of a GraphRequest.

Decoding rules for the raw body:

    valid JSON object/array   kept as is
    true / false              {"success": <bool>}   (Graph < 2.1)
    JSON number               {"id": <number>}
    other JSON scalars        {}
    not JSON                  parsed as a URL-encoded query string

A response whose decoded body holds an "error" key is an error response;
its ResponseException is built eagerly so the client can raise it.
"""

import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from requests.structures import CaseInsensitiveDict

from .exceptions import ResponseException, SDKException
from .graph_nodes import (
    GraphAlbum,
    GraphEdge,
    GraphEvent,
    GraphGroup,
    GraphNode,
    GraphNodeFactory,
    GraphPage,
    GraphSessionInfo,
    GraphUser,
)


class GraphResponse:
    """A response from Graph bound to the request that produced it."""

    def __init__(
        self,
        request,
        body: Optional[str] = None,
        http_status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.request = request
        self.body = body
        self._http_status_code = http_status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.decoded_body: Any = {}
        self.thrown_exception: Optional[SDKException] = None

        self.decode_body()

    def decode_body(self) -> None:
        try:
            decoded = json.loads(self.body) if self.body is not None else None
        except ValueError:
            self.decoded_body = dict(parse_qsl(self.body, keep_blank_values=True))
        else:
            if isinstance(decoded, bool):
                self.decoded_body = {"success": decoded}
            elif isinstance(decoded, (int, float)):
                self.decoded_body = {"id": decoded}
            elif isinstance(decoded, (dict, list)):
                self.decoded_body = decoded
            else:
                self.decoded_body = {}

        if self.is_error():
            self.make_exception()

    def is_error(self) -> bool:
        return isinstance(self.decoded_body, dict) and self.decoded_body.get("error") is not None

    def make_exception(self) -> None:
        self.thrown_exception = ResponseException.create(self)

    def raise_exception(self) -> None:
        raise self.thrown_exception

    @property
    def http_status_code(self) -> int:
        return self._http_status_code or 0

    @property
    def app(self):
        return self.request.app

    @property
    def access_token(self) -> Optional[str]:
        return self.request.access_token

    @property
    def app_secret_proof(self) -> Optional[str]:
        return self.request.app_secret_proof

    @property
    def e_tag(self) -> Optional[str]:
        return self.headers.get("ETag")

    @property
    def graph_version(self) -> Optional[str]:
        return self.headers.get("Facebook-API-Version")

    def get_graph_node(self, subclass: Any = None) -> GraphNode:
        return GraphNodeFactory(self).make_graph_node(subclass)

    def get_graph_edge(self, subclass: Any = None) -> GraphEdge:
        return GraphNodeFactory(self).make_graph_edge(subclass)

    def get_graph_album(self) -> GraphAlbum:
        return GraphNodeFactory(self).make_graph_album()

    def get_graph_page(self) -> GraphPage:
        return GraphNodeFactory(self).make_graph_page()

    def get_graph_session_info(self) -> GraphSessionInfo:
        return GraphNodeFactory(self).make_graph_session_info()

    def get_graph_user(self) -> GraphUser:
        return GraphNodeFactory(self).make_graph_user()

    def get_graph_event(self) -> GraphEvent:
        return GraphNodeFactory(self).make_graph_event()

    def get_graph_group(self) -> GraphGroup:
        return GraphNodeFactory(self).make_graph_group()

    def __repr__(self) -> str:
        return f"GraphResponse(http_status_code={self.http_status_code})"
