"""Tests for facebook_graph_sdk.graph_nodes: node casting, typed nodes and Birthday."""

import json
import pickle
from datetime import date, datetime, timezone

import pytest

from conftest import load_fixture
from facebook_graph_sdk.access_token import AccessToken
from facebook_graph_sdk.exceptions import SDKException
from facebook_graph_sdk.graph_nodes import (
    Birthday,
    Collection,
    GraphAchievement,
    GraphApplication,
    GraphCoverPhoto,
    GraphEdge,
    GraphEvent,
    GraphGroup,
    GraphLocation,
    GraphNode,
    GraphNodeFactory,
    GraphPage,
    GraphPicture,
    GraphSessionInfo,
    GraphUser,
    resolve_node_type,
)
from facebook_graph_sdk.request import GraphRequest
from facebook_graph_sdk.response import GraphResponse


class ProjectNode(GraphNode):
    graph_object_map = {"owner": "GraphUser"}


def make_response(app, body):
    request = GraphRequest(app, "foo_token", "GET", "/me", {}, None, "v15.0")
    return GraphResponse(request, json.dumps(body), 200)


@pytest.fixture
def user(app):
    return make_response(app, load_fixture("user.json")).get_graph_user()


def test_user_fields(user):
    assert isinstance(user, GraphUser)
    assert user.id == "123"
    assert user.name == "Foo Bar"
    assert user.first_name == "Foo"
    assert user.last_name == "Bar"
    assert user.email == "foo@example.com"
    assert user.middle_name is None


def test_user_birthday(user):
    assert isinstance(user.birthday, Birthday)
    assert user.birthday == date(1984, 7, 22)
    assert user.birthday.has_date is True
    assert user.birthday.has_year is True


def test_date_fields_are_cast(user):
    assert user["updated_time"] == datetime(2016, 4, 26, 13, 22, 5, tzinfo=timezone.utc)


def test_nested_nodes_use_object_map(user):
    assert isinstance(user.location, GraphPage)
    assert user.location.name == "Mountain View, California"

    assert isinstance(user.hometown, GraphPage)
    assert isinstance(user.hometown.location, GraphLocation)
    assert user.hometown.location.city == "Springfield"
    assert user.hometown.location.latitude == 39.8

    assert isinstance(user.significant_other, GraphUser)
    assert user.significant_other.name == "Baz Qux"


def test_node_under_data_key_is_merged(user):
    picture = user.picture
    assert isinstance(picture, GraphPicture)
    assert picture.url == "https://example.com/picture.jpg"
    assert picture.is_silhouette is False
    assert picture.width == 50


def test_nested_edge(user):
    photos = user["photos"]
    assert isinstance(photos, GraphEdge)
    assert len(photos) == 2
    assert photos.parent_graph_edge == "/123/photos"
    assert photos[0]["created_time"] == datetime.fromtimestamp(1405547020, timezone.utc)
    assert photos[1]["created_time"] == datetime(2014, 7, 15, 3, 54, 34, tzinfo=timezone.utc)
    assert photos.next_cursor == "cDI="


def test_bare_arrays_become_tuples(user):
    languages = user["languages"]
    assert isinstance(languages, tuple)
    assert [type(language) for language in languages] == [GraphNode, GraphNode]
    assert languages[1]["name"] == "French"
    assert user["favorite_numbers"] == (3, 7)


def test_as_array_is_plain(user):
    data = user.as_array()
    assert data["location"] == {"id": "104022926303756", "name": "Mountain View, California"}
    assert data["languages"] == [{"id": "l1", "name": "English"}, {"id": "l2", "name": "French"}]
    assert isinstance(data["photos"], list)
    assert data["photos"][0]["id"] == "p1"


def test_as_json_uncasts_values(user):
    data = json.loads(user.as_json())
    assert data["updated_time"] == "2016-04-26T13:22:05+0000"
    assert data["birthday"] == "07/22/1984"
    assert data["photos"][0]["created_time"] == "2014-07-16T21:43:40+0000"
    assert data["favorite_numbers"] == [3, 7]


def test_node_is_a_read_only_mapping(user):
    assert "name" in user
    assert user.get("missing") is None
    assert user.get_field("missing", "default") == "default"
    assert "id" in user.field_names
    assert dict(user.items())["id"] == "123"
    with pytest.raises(TypeError):
        user["name"] = "Other"


def test_map_returns_new_node():
    node = GraphNode({"a": 1, "b": 2})
    doubled = node.map(lambda value, key: value * 2)
    assert isinstance(doubled, GraphNode)
    assert doubled.all() == {"a": 2, "b": 4}
    assert node.all() == {"a": 1, "b": 2}


def test_numeric_string_timestamps_are_cast():
    node = GraphNode({"created_time": "1405547020"})
    assert node["created_time"] == datetime.fromtimestamp(1405547020, timezone.utc)


def test_non_date_fields_are_not_cast():
    node = GraphNode({"message": "2014-07-15T03:54:34+0000", "created_time": "not a date"})
    assert node["message"] == "2014-07-15T03:54:34+0000"
    assert node["created_time"] == "not a date"


def test_out_of_range_timestamp_stays_raw():
    node = GraphNode({"publish_time": 1600000000000, "created_time": 1405547020})
    assert node["publish_time"] == 1600000000000
    assert node["created_time"] == datetime.fromtimestamp(1405547020, timezone.utc)


@pytest.mark.parametrize("raw", ["", "07/", "13/45/1984"])
def test_unparseable_birthday_stays_raw(raw):
    node = GraphNode({"id": "123", "birthday": raw})
    assert node["birthday"] == raw
    assert node["id"] == "123"
    assert json.loads(node.as_json())["birthday"] == raw


def test_page_fields(app):
    page = make_response(app, load_fixture("page.json")).get_graph_page()
    assert page.id == "42"
    assert page.category == "Software"
    assert page.fan_count == 1337
    assert page.perms == ("ADMINISTER", "EDIT_PROFILE")
    assert page.access_token == AccessToken("page_token")
    assert isinstance(page.cover, GraphCoverPhoto)
    assert page.cover.id == 9001
    assert page.cover.offset_y == 25
    assert isinstance(page.location, GraphLocation)
    assert page.location.street == "1 Hacker Way"
    assert isinstance(page.best_page, GraphPage)


def test_page_access_token_uncasts(app):
    page = make_response(app, load_fixture("page.json")).get_graph_page()
    assert json.loads(page.as_json())["access_token"] == "page_token"


def test_achievement(app):
    achievement = make_response(app, {
        "id": "1",
        "from": {"id": "123", "name": "Foo Bar"},
        "application": {"id": "456", "name": "Foo Game"},
        "publish_time": "2014-07-15T03:54:34+0000",
        "no_feed_story": False,
    }).get_graph_node(GraphAchievement)

    assert isinstance(achievement.from_user, GraphUser)
    assert isinstance(achievement.application, GraphApplication)
    assert achievement.application.id == "456"
    assert achievement.type == "game.achievement"
    assert isinstance(achievement.publish_time, datetime)
    assert achievement.is_no_feed_story is False


def test_album(app):
    album = make_response(app, {
        "id": 9,
        "count": "12",
        "can_upload": True,
        "from": {"id": "123"},
        "place": {"id": "42", "name": "Somewhere"},
        "created_time": "2014-07-15T03:54:34+0000",
    }).get_graph_album()

    assert album.id == "9"
    assert album.count == 12
    assert album.can_upload is True
    assert isinstance(album.from_user, GraphUser)
    assert isinstance(album.place, GraphPage)
    assert isinstance(album.created_time, datetime)
    assert album.updated_time is None


def test_event_and_group(app):
    event = make_response(app, {
        "id": "1",
        "name": "Party",
        "start_time": "2014-07-15T03:54:34+0000",
        "cover": {"id": "5", "source": "https://example.com/c.jpg"},
        "parent_group": {"id": "7", "venue": {"city": "Menlo Park"}},
        "attending_count": 10,
    }).get_graph_event()

    assert isinstance(event.start_time, datetime)
    assert isinstance(event.cover, GraphCoverPhoto)
    assert isinstance(event.parent_group, GraphGroup)
    assert isinstance(event.parent_group.venue, GraphLocation)
    assert event.parent_group.venue.city == "Menlo Park"
    assert event.attending_count == 10
    assert event.end_time is None


def test_session_info(app):
    info = make_response(app, load_fixture("debug_token.json")).get_graph_session_info()
    assert isinstance(info, GraphSessionInfo)
    assert info.app_id == "123"
    assert info.is_valid is True
    assert info.scopes == ["email", "public_profile"]
    assert info.expires_at == datetime.fromtimestamp(1700000000, timezone.utc)


def test_custom_subclass_by_name(app):
    node = make_response(app, {"id": "1", "owner": {"id": "2", "name": "Foo"}}).get_graph_node("ProjectNode")
    assert isinstance(node, ProjectNode)
    assert isinstance(node["owner"], GraphUser)


def test_inner_data_keys_win_when_merging(app):
    node = make_response(app, {"data": {"id": "1", "kind": "inner"}, "kind": "outer", "extra": "x"}).get_graph_node()
    assert node["kind"] == "inner"
    assert node["extra"] == "x"


def test_node_from_edge_response_raises(app):
    with pytest.raises(SDKException) as exc_info:
        make_response(app, load_fixture("friends_page1.json")).get_graph_node()
    assert exc_info.value.code == 620


def test_edge_from_node_response_raises(app):
    with pytest.raises(SDKException) as exc_info:
        make_response(app, {"id": "1"}).get_graph_edge()
    assert exc_info.value.code == 620


def test_list_body_cannot_be_cast(app):
    with pytest.raises(SDKException) as exc_info:
        make_response(app, [{"id": "1"}]).get_graph_node()
    assert exc_info.value.code == 620


@pytest.mark.parametrize("subclass", ["FooNode", str, GraphEdge, 42])
def test_invalid_subclass_raises(app, subclass):
    factory = GraphNodeFactory(make_response(app, {"id": "1"}))
    with pytest.raises(SDKException) as exc_info:
        factory.make_graph_node(subclass)
    assert exc_info.value.code == 620


def test_resolve_node_type():
    assert resolve_node_type(None) is GraphNode
    assert resolve_node_type("GraphUser") is GraphUser
    assert resolve_node_type("facebook_graph_sdk.graph_nodes.GraphPage") is GraphPage
    assert resolve_node_type(GraphEvent) is GraphEvent


def test_empty_data_object_is_an_edge(app):
    edge = make_response(app, {"data": {}}).get_graph_edge()
    assert isinstance(edge, GraphEdge)
    assert len(edge) == 0


def test_edge_keeps_non_object_items(app):
    edge = make_response(app, {"data": ["foo", 42]}).get_graph_edge()
    assert list(edge) == ["foo", 42]


@pytest.mark.parametrize("raw,expected,has_date,has_year", [
    ("07/22/1984", date(1984, 7, 22), True, True),
    ("07/22", date(2000, 7, 22), True, False),
    ("1984", date(1984, 1, 1), False, True),
])
def test_birthday_formats(raw, expected, has_date, has_year):
    birthday = Birthday(raw)
    assert birthday == expected
    assert birthday.has_date is has_date
    assert birthday.has_year is has_year
    assert birthday.raw == raw


def test_birthday_pickles_with_flags():
    birthday = pickle.loads(pickle.dumps(Birthday("07/22")))
    assert birthday.has_year is False
    assert birthday.raw == "07/22"


def test_birthday_rejects_garbage():
    with pytest.raises(ValueError):
        Birthday("1/2/3/4")


def test_collection_basics():
    collection = Collection({"foo": "bar", "empty": None})
    assert collection.get_field("foo") == "bar"
    assert collection.get_field("empty", "default") == "default"
    assert json.loads(str(collection)) == {"foo": "bar", "empty": None}
    assert Collection([1, 2]).field_names == [0, 1]
    assert Collection({"a": 1}) == Collection({"a": 1})
