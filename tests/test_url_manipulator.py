"""Tests for facebook_graph_sdk.url_manipulator."""

import pytest

from facebook_graph_sdk.url_manipulator import (
    append_params_to_url,
    base_graph_url_endpoint,
    build_query,
    flatten_params,
    force_slash_prefix,
    get_params_as_dict,
    merge_url_params,
    remove_params_from_url,
)


def test_build_query_flattens_nested_values():
    query = build_query({
        "a": 1,
        "b": {"c": "d"},
        "e": [1, 2],
        "f": None,
        "g": True,
        "h": False,
    })
    assert query == "a=1&b%5Bc%5D=d&e%5B0%5D=1&e%5B1%5D=2&g=true&h=false"


def test_build_query_custom_separator():
    assert build_query({"a": 1, "b": 2}, "&amp;") == "a=1&amp;b=2"


def test_build_query_encodes_values():
    assert build_query({"redirect_uri": "https://foo.bar/?x=1"}) == "redirect_uri=https%3A%2F%2Ffoo.bar%2F%3Fx%3D1"


def test_flatten_params_nested_lists():
    assert flatten_params({"ids": [[1, 2]]}) == [("ids[0][0]", "1"), ("ids[0][1]", "2")]


@pytest.mark.parametrize("url,expected", [
    ("https://www.facebook.com/foo?code=1&state=2&bar=baz", "https://www.facebook.com/foo?bar=baz"),
    ("https://www.facebook.com/foo?code=1&state=2", "https://www.facebook.com/foo"),
    ("/me?access_token=x&appsecret_proof=y", "/me"),
    ("/me/friends?limit=5&access_token=x", "/me/friends?limit=5"),
    ("me", "me"),
    ("", ""),
    ("https://example.com?code=1", "https://example.com"),
    ("https://user@Example.com?x=1&code=2", "https://user@Example.com?x=1"),
    ("https://localhost:8080/callback?code=1#_=_", "https://localhost:8080/callback#_=_"),
])
def test_remove_params_from_url(url, expected):
    assert remove_params_from_url(url, ["code", "state", "access_token", "appsecret_proof"]) == expected


def test_append_params_to_url_without_query():
    assert append_params_to_url("/me", {"fields": "id,name"}) == "/me?fields=id%2Cname"


def test_append_params_to_url_existing_params_win():
    url = append_params_to_url("/me?b=2&a=old", {"a": "new", "c": "3"})
    assert url == "/me?a=old&b=2&c=3"


def test_append_params_to_url_nothing_to_add():
    assert append_params_to_url("/me?a=1", {}) == "/me?a=1"


def test_get_params_as_dict():
    assert get_params_as_dict("https://foo.bar/?a=1&b=&c=3") == {"a": "1", "b": "", "c": "3"}
    assert get_params_as_dict("https://foo.bar/") == {}


def test_merge_url_params():
    merged = merge_url_params("https://graph.facebook.com/?after=abc", "/me/friends?limit=10")
    assert merged == "/me/friends?after=abc&limit=10"
    assert merge_url_params("https://graph.facebook.com/", "/me") == "/me"


def test_force_slash_prefix():
    assert force_slash_prefix("me") == "/me"
    assert force_slash_prefix("/me") == "/me"
    assert force_slash_prefix("") == ""
    assert force_slash_prefix(None) is None


@pytest.mark.parametrize("url,expected", [
    ("https://graph.facebook.com/v15.0/123/photos?after=MjA%3D", "/123/photos?after=MjA%3D"),
    ("https://graph.facebook.com/123/photos", "/123/photos"),
    ("https://graph.beta.facebook.com/v15.0/me/friends", "/me/friends"),
    ("https://graph-video.facebook.com/v15.0/me/videos", "/me/videos"),
    ("http://graph.fb.com/v2.8/me", "/me"),
])
def test_base_graph_url_endpoint(url, expected):
    assert base_graph_url_endpoint(url) == expected
