"""Tests for facebook_graph_sdk.signed_request."""

import base64
import hashlib
import hmac
import json

import pytest

from facebook_graph_sdk.app import FacebookApp
from facebook_graph_sdk.exceptions import SDKException
from facebook_graph_sdk.signed_request import SignedRequest, base64_url_decode, base64_url_encode

PAYLOAD = {
    "oauth_token": "foo_token",
    "algorithm": "HMAC-SHA256",
    "expires": 321,
    "issued_at": 123,
    "user_id": 123456,
}


def sign(payload_bytes, secret="foo_secret"):
    """Build a raw signed request by hand."""
    encoded_payload = base64.urlsafe_b64encode(payload_bytes).decode()
    sig = hmac.new(secret.encode(), encoded_payload.encode(), hashlib.sha256).digest()
    return f"{base64.urlsafe_b64encode(sig).decode()}.{encoded_payload}"


def test_base64_url_round_trip_without_padding():
    assert base64_url_decode("aGVsbG8") == b"hello"
    assert base64_url_decode("aGVsbG8=") == b"hello"
    assert base64_url_decode(base64_url_encode(b"\xfb\xff")) == b"\xfb\xff"
    assert base64_url_encode(b"\xfb\xff") == "-_8="


def test_base64_url_decode_rejects_garbage():
    with pytest.raises(SDKException) as exc_info:
        base64_url_decode("%%%")
    assert exc_info.value.code == 608


def test_parse_valid_signed_request(app):
    signed_request = SignedRequest(app, sign(json.dumps(PAYLOAD).encode()))

    assert signed_request.payload == PAYLOAD
    assert signed_request.get("oauth_token") == "foo_token"
    assert signed_request.get("missing", "default") == "default"
    assert signed_request.user_id == "123456"
    assert signed_request.has_oauth_data() is True


def test_make_then_parse(app):
    raw = SignedRequest(app).make({"user_id": "42", "code": "foo_code"})
    signed_request = SignedRequest(app, raw)

    assert signed_request.raw_signed_request == raw
    assert signed_request.get("algorithm") == "HMAC-SHA256"
    assert isinstance(signed_request.get("issued_at"), int)
    assert signed_request.user_id == "42"
    assert signed_request.has_oauth_data() is True


def test_empty_signed_request(app):
    signed_request = SignedRequest(app)
    assert signed_request.payload is None
    assert signed_request.user_id is None
    assert signed_request.has_oauth_data() is False


def test_wrong_secret_is_rejected():
    raw = sign(json.dumps(PAYLOAD).encode(), secret="other_secret")
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(FacebookApp("123", "foo_secret"), raw)
    assert exc_info.value.code == 602


def test_tampered_payload_is_rejected(app):
    raw = sign(json.dumps(PAYLOAD).encode())
    sig, _ = raw.split(".", 1)
    tampered = base64.urlsafe_b64encode(json.dumps({**PAYLOAD, "user_id": 1}).encode()).decode()
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, f"{sig}.{tampered}")
    assert exc_info.value.code == 602


def test_missing_dot_is_malformed(app):
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, "no_dot_here")
    assert exc_info.value.code == 606


def test_empty_signature(app):
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, ".eyJmb28iOiJiYXIifQ")
    assert exc_info.value.code == 607


def test_bad_base64_signature(app):
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, "%%%.eyJmb28iOiJiYXIifQ")
    assert exc_info.value.code == 608


def test_payload_must_be_json_object(app):
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, sign(b"not json"))
    assert exc_info.value.code == 607


def test_wrong_algorithm(app):
    payload = json.dumps({**PAYLOAD, "algorithm": "HMAC-SHA1"}).encode()
    with pytest.raises(SDKException) as exc_info:
        SignedRequest(app, sign(payload))
    assert exc_info.value.code == 605
