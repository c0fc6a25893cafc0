"""Tests for facebook_graph_sdk.http_client."""

from unittest.mock import MagicMock

import pytest
import requests

from facebook_graph_sdk.exceptions import SDKException
from facebook_graph_sdk.http_client import (
    GraphRawResponse,
    RequestsHttpClient,
    create_http_client,
)


def test_raw_response_from_mapping():
    raw = GraphRawResponse({"ETag": '"abc"', "Content-Type": "application/json"}, '{"id":"1"}', 200)
    assert raw.body == '{"id":"1"}'
    assert raw.http_status_code == 200
    assert raw.headers["etag"] == '"abc"'


def test_raw_response_from_header_block_keeps_last_response():
    raw_headers = (
        "HTTP/1.1 100 Continue\r\n\r\n"
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: application/json\r\n"
        "Facebook-API-Version: v15.0\r\n"
        'ETag: "9d86b21aa74d74e574bbb35ba13524a52deb96e3"\r\n\r\n'
    )
    raw = GraphRawResponse(raw_headers, "{}")
    assert raw.http_status_code == 200
    assert raw.headers["Facebook-API-Version"] == "v15.0"
    assert raw.headers["ETag"] == '"9d86b21aa74d74e574bbb35ba13524a52deb96e3"'
    assert "HTTP/1.1 100 Continue" not in raw.headers


def test_raw_response_status_defaults_to_zero():
    assert GraphRawResponse({}, "").http_status_code == 0


def test_raw_response_rejects_negative_status():
    with pytest.raises(ValueError):
        GraphRawResponse({}, "", -1)


def test_requests_client_sends_through_session():
    session = MagicMock(spec=requests.Session)
    session.request.return_value = MagicMock(
        headers={"Content-Type": "application/json"}, text='{"id":"1"}', status_code=201
    )
    http_client = RequestsHttpClient(session)

    raw = http_client.send("https://graph.facebook.com/v15.0/me", "POST", "a=1", {"X-Foo": "bar"}, 60)

    session.request.assert_called_once_with(
        "POST",
        "https://graph.facebook.com/v15.0/me",
        data="a=1",
        headers={"X-Foo": "bar"},
        timeout=60,
    )
    assert raw.http_status_code == 201
    assert raw.body == '{"id":"1"}'
    assert raw.headers["content-type"] == "application/json"


def test_requests_client_wraps_transport_errors():
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("connection refused")
    http_client = RequestsHttpClient(session)

    with pytest.raises(SDKException) as exc_info:
        http_client.send("https://graph.facebook.com/v15.0/me", "GET", "", {}, 60)

    assert "connection refused" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_create_http_client():
    assert isinstance(create_http_client(), RequestsHttpClient)
    assert isinstance(create_http_client("requests"), RequestsHttpClient)

    session = requests.Session()
    wrapped = create_http_client(session)
    assert isinstance(wrapped, RequestsHttpClient)
    assert wrapped.session is session

    custom = RequestsHttpClient()
    assert create_http_client(custom) is custom


def test_create_http_client_rejects_unknown_handler():
    with pytest.raises(ValueError):
        create_http_client("curl")
