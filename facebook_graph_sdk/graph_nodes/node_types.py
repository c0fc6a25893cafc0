"""
Typed Graph nodes — Field accessors for the common Graph object types.

Each type lists in graph_object_map the nested fields that should be cast
as another node type, e.g. GraphUser.location becomes a GraphPage.
"""

from datetime import datetime
from typing import Any, List, Optional

from ..type_mapping import map_type
from .birthday import Birthday
from .graph_node import GraphNode


class GraphApplication(GraphNode):
    @property
    def id(self) -> Optional[str]:
        return self.get_field("id")


class GraphLocation(GraphNode):
    @property
    def street(self) -> Optional[str]:
        return map_type(self.get_field("street"), "str")

    @property
    def city(self) -> Optional[str]:
        return map_type(self.get_field("city"), "str")

    @property
    def state(self) -> Optional[str]:
        return map_type(self.get_field("state"), "str")

    @property
    def country(self) -> Optional[str]:
        return map_type(self.get_field("country"), "str")

    @property
    def zip(self) -> Optional[str]:
        return map_type(self.get_field("zip"), "str")

    @property
    def latitude(self) -> Optional[float]:
        return map_type(self.get_field("latitude"), "float")

    @property
    def longitude(self) -> Optional[float]:
        return map_type(self.get_field("longitude"), "float")


class GraphPicture(GraphNode):
    @property
    def is_silhouette(self) -> Optional[bool]:
        return map_type(self.get_field("is_silhouette"), "bool_or_null")

    @property
    def url(self) -> Optional[str]:
        return map_type(self.get_field("url"), "str")

    @property
    def width(self) -> Optional[int]:
        return map_type(self.get_field("width"), "int")

    @property
    def height(self) -> Optional[int]:
        return map_type(self.get_field("height"), "int")


class GraphCoverPhoto(GraphNode):
    @property
    def id(self) -> Optional[int]:
        return map_type(self.get_field("id"), "int")

    @property
    def source(self) -> Optional[str]:
        return map_type(self.get_field("source"), "str")

    @property
    def offset_x(self) -> Optional[int]:
        return map_type(self.get_field("offset_x"), "int")

    @property
    def offset_y(self) -> Optional[int]:
        return map_type(self.get_field("offset_y"), "int")


class GraphSessionInfo(GraphNode):
    """The "data" object of a /debug_token response."""

    @property
    def app_id(self) -> Optional[str]:
        return map_type(self.get_field("app_id"), "str")

    @property
    def application(self) -> Optional[str]:
        return map_type(self.get_field("application"), "str")

    @property
    def expires_at(self) -> Optional[datetime]:
        return map_type(self.get_field("expires_at"), "datetime")

    @property
    def is_valid(self) -> bool:
        return map_type(self.get_field("is_valid"), "bool")

    @property
    def issued_at(self) -> Optional[datetime]:
        return map_type(self.get_field("issued_at"), "datetime")

    @property
    def scopes(self) -> List[str]:
        return list(map_type(self.get_field("scopes"), "list", []))

    @property
    def user_id(self) -> Optional[str]:
        return map_type(self.get_field("user_id"), "str")


class GraphPage(GraphNode):
    graph_object_map = {
        "best_page": "GraphPage",
        "global_brand_parent_page": "GraphPage",
        "location": "GraphLocation",
        "cover": "GraphCoverPhoto",
        "picture": "GraphPicture",
    }

    @property
    def id(self) -> Optional[str]:
        return self.get_field("id")

    @property
    def category(self) -> Optional[str]:
        return self.get_field("category")

    @property
    def name(self) -> Optional[str]:
        return self.get_field("name")

    @property
    def best_page(self) -> Optional["GraphPage"]:
        return self.get_field("best_page")

    @property
    def global_brand_parent_page(self) -> Optional["GraphPage"]:
        return self.get_field("global_brand_parent_page")

    @property
    def location(self) -> Optional[GraphLocation]:
        return self.get_field("location")

    @property
    def cover(self) -> Optional[GraphCoverPhoto]:
        return self.get_field("cover")

    @property
    def picture(self) -> Optional[GraphPicture]:
        return self.get_field("picture")

    @property
    def access_token(self):
        """The page access token (an AccessToken) when requested with manage_pages."""
        return self.get_field("access_token")

    @property
    def perms(self) -> Optional[List[str]]:
        return self.get_field("perms")

    @property
    def fan_count(self) -> Optional[int]:
        return self.get_field("fan_count")


class GraphUser(GraphNode):
    graph_object_map = {
        "hometown": "GraphPage",
        "location": "GraphPage",
        "significant_other": "GraphUser",
        "picture": "GraphPicture",
    }

    @property
    def id(self) -> Optional[str]:
        return map_type(self.get_field("id"), "str")

    @property
    def name(self) -> Optional[str]:
        return self.get_field("name")

    @property
    def first_name(self) -> Optional[str]:
        return self.get_field("first_name")

    @property
    def middle_name(self) -> Optional[str]:
        return self.get_field("middle_name")

    @property
    def last_name(self) -> Optional[str]:
        return self.get_field("last_name")

    @property
    def email(self) -> Optional[str]:
        return self.get_field("email")

    @property
    def gender(self) -> Optional[str]:
        return self.get_field("gender")

    @property
    def link(self) -> Optional[str]:
        return self.get_field("link")

    @property
    def birthday(self) -> Optional[Birthday]:
        return self.get_field("birthday")

    @property
    def location(self) -> Optional[GraphPage]:
        return self.get_field("location")

    @property
    def hometown(self) -> Optional[GraphPage]:
        return self.get_field("hometown")

    @property
    def significant_other(self) -> Optional["GraphUser"]:
        return self.get_field("significant_other")

    @property
    def picture(self) -> Optional[GraphPicture]:
        return self.get_field("picture")


class GraphAchievement(GraphNode):
    graph_object_map = {
        "from": "GraphUser",
        "application": "GraphApplication",
    }

    @property
    def id(self) -> Optional[str]:
        return self.get_field("id")

    @property
    def from_user(self) -> Optional[GraphUser]:
        return self.get_field("from")

    @property
    def publish_time(self) -> Optional[datetime]:
        return self.get_field("publish_time")

    @property
    def application(self) -> Optional[GraphApplication]:
        return self.get_field("application")

    @property
    def data(self) -> Any:
        return self.get_field("data")

    @property
    def type(self) -> str:
        """Always "game.achievement"."""
        return "game.achievement"

    @property
    def is_no_feed_story(self) -> Optional[bool]:
        return self.get_field("no_feed_story")


class GraphAlbum(GraphNode):
    graph_object_map = {
        "from": "GraphUser",
        "place": "GraphPage",
    }

    @property
    def id(self) -> Optional[str]:
        return map_type(self.get_field("id"), "str")

    @property
    def can_upload(self) -> Optional[bool]:
        return map_type(self.get_field("can_upload"), "bool_or_null")

    @property
    def count(self) -> Optional[int]:
        return map_type(self.get_field("count"), "int")

    @property
    def cover_photo(self) -> Optional[str]:
        return map_type(self.get_field("cover_photo"), "str")

    @property
    def created_time(self) -> Optional[datetime]:
        return map_type(self.get_field("created_time"), "datetime")

    @property
    def updated_time(self) -> Optional[datetime]:
        return map_type(self.get_field("updated_time"), "datetime")

    @property
    def description(self) -> Optional[str]:
        return map_type(self.get_field("description"), "str")

    @property
    def from_user(self) -> Optional[GraphUser]:
        return map_type(self.get_field("from"), GraphUser)

    @property
    def place(self) -> Optional[GraphPage]:
        return map_type(self.get_field("place"), GraphPage)

    @property
    def link(self) -> Optional[str]:
        return map_type(self.get_field("link"), "str")

    @property
    def location(self) -> Optional[str]:
        return map_type(self.get_field("location"), "str")

    @property
    def name(self) -> Optional[str]:
        return map_type(self.get_field("name"), "str")

    @property
    def privacy(self) -> Optional[str]:
        return map_type(self.get_field("privacy"), "str")

    @property
    def type(self) -> Optional[str]:
        return map_type(self.get_field("type"), "str")


class GraphGroup(GraphNode):
    graph_object_map = {
        "cover": "GraphCoverPhoto",
        "venue": "GraphLocation",
    }

    @property
    def id(self) -> Optional[str]:
        return map_type(self.get_field("id"), "str")

    @property
    def cover(self) -> Optional[GraphCoverPhoto]:
        return map_type(self.get_field("cover"), GraphCoverPhoto)

    @property
    def description(self) -> Optional[str]:
        return map_type(self.get_field("description"), "str")

    @property
    def email(self) -> Optional[str]:
        return map_type(self.get_field("email"), "str")

    @property
    def icon(self) -> Optional[str]:
        return map_type(self.get_field("icon"), "str")

    @property
    def link(self) -> Optional[str]:
        return map_type(self.get_field("link"), "str")

    @property
    def name(self) -> Optional[str]:
        return map_type(self.get_field("name"), "str")

    @property
    def member_request_count(self) -> Optional[int]:
        return map_type(self.get_field("member_request_count"), "int")

    @property
    def owner(self) -> Optional[GraphNode]:
        return map_type(self.get_field("owner"), GraphNode)

    @property
    def parent(self) -> Optional[GraphNode]:
        return map_type(self.get_field("parent"), GraphNode)

    @property
    def privacy(self) -> Optional[str]:
        return map_type(self.get_field("privacy"), "str")

    @property
    def updated_time(self) -> Optional[datetime]:
        return map_type(self.get_field("updated_time"), "datetime")

    @property
    def venue(self) -> Optional[GraphLocation]:
        return map_type(self.get_field("venue"), GraphLocation)


class GraphEvent(GraphNode):
    graph_object_map = {
        "cover": "GraphCoverPhoto",
        "place": "GraphPage",
        "picture": "GraphPicture",
        "parent_group": "GraphGroup",
    }

    @property
    def id(self) -> Optional[str]:
        return map_type(self.get_field("id"), "str")

    @property
    def cover(self) -> Optional[GraphCoverPhoto]:
        return map_type(self.get_field("cover"), GraphCoverPhoto)

    @property
    def description(self) -> Optional[str]:
        return map_type(self.get_field("description"), "str")

    @property
    def end_time(self) -> Optional[datetime]:
        return map_type(self.get_field("end_time"), "datetime")

    @property
    def is_date_only(self) -> Optional[bool]:
        return map_type(self.get_field("is_date_only"), "bool_or_null")

    @property
    def name(self) -> Optional[str]:
        return map_type(self.get_field("name"), "str")

    @property
    def owner(self) -> Optional[GraphNode]:
        return map_type(self.get_field("owner"), GraphNode)

    @property
    def parent_group(self) -> Optional[GraphGroup]:
        return map_type(self.get_field("parent_group"), GraphGroup)

    @property
    def place(self) -> Optional[GraphPage]:
        return map_type(self.get_field("place"), GraphPage)

    @property
    def privacy(self) -> Optional[str]:
        return map_type(self.get_field("privacy"), "str")

    @property
    def start_time(self) -> Optional[datetime]:
        return map_type(self.get_field("start_time"), "datetime")

    @property
    def ticket_uri(self) -> Optional[str]:
        return map_type(self.get_field("ticket_uri"), "str")

    @property
    def timezone(self) -> Optional[str]:
        return map_type(self.get_field("timezone"), "str")

    @property
    def updated_time(self) -> Optional[datetime]:
        return map_type(self.get_field("updated_time"), "datetime")

    @property
    def picture(self) -> Optional[GraphPicture]:
        return map_type(self.get_field("picture"), GraphPicture)

    @property
    def attending_count(self) -> Optional[int]:
        return map_type(self.get_field("attending_count"), "int")

    @property
    def declined_count(self) -> Optional[int]:
        return map_type(self.get_field("declined_count"), "int")

    @property
    def maybe_count(self) -> Optional[int]:
        return map_type(self.get_field("maybe_count"), "int")

    @property
    def noreply_count(self) -> Optional[int]:
        return map_type(self.get_field("noreply_count"), "int")

    @property
    def invited_count(self) -> Optional[int]:
        return map_type(self.get_field("invited_count"), "int")
