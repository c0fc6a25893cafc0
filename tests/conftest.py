"""Shared fixtures: a test app, a mocked HTTP transport and raw response builders."""

import json
import os
from unittest.mock import MagicMock

import pytest

from facebook_graph_sdk.app import FacebookApp
from facebook_graph_sdk.client import GraphClient
from facebook_graph_sdk.http_client import GraphRawResponse, HttpClientInterface

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(name):
    with open(os.path.join(FIXTURES_DIR, name)) as f:
        return json.load(f)


def raw_response(body, status=200, headers=None):
    """A GraphRawResponse as the transport would return it."""
    if not isinstance(body, str):
        body = json.dumps(body)
    return GraphRawResponse(headers or {"Content-Type": "application/json"}, body, status)


def graph_error(code, message="Boom", subcode=None, error_type="OAuthException", error_data=None):
    error = {"message": message, "type": error_type, "code": code}
    if subcode is not None:
        error["error_subcode"] = subcode
    if error_data is not None:
        error["error_data"] = error_data
    return {"error": error}


@pytest.fixture
def app():
    return FacebookApp("123", "foo_secret")


@pytest.fixture
def http_client():
    return MagicMock(spec=HttpClientInterface)


@pytest.fixture
def client(http_client):
    return GraphClient(http_client)


@pytest.fixture
def upload_file(tmp_path):
    path = tmp_path / "foo.txt"
    path.write_bytes(b"This is a text file used for testing. Let's dance.")
    return path
