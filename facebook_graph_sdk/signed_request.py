"""
Signed Request — Parse and build the "signed_request" values Facebook hands to
canvas apps, page tabs and the JavaScript SDK cookie.

Format: base64url(HMAC-SHA256(payload, app_secret)) "." base64url(json payload)

Error codes:
    602  invalid signature
    605  algorithm other than HMAC-SHA256
    606  malformed (no ".")
    607  empty signature or undecodable payload
    608  malformed base64
"""

import base64
import binascii
import hashlib
import hmac
import json
import re
import time
from typing import Any, Dict, Optional

from .app import FacebookApp
from .exceptions import SDKException

BASE64_PATTERN = re.compile(r"^[a-zA-Z0-9/\r\n+]*={0,2}$")
ALGORITHM = "HMAC-SHA256"


def base64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


def base64_url_decode(value: str) -> bytes:
    """Decode base64url, tolerating missing padding.

    Raises:
        SDKException: (608) on characters outside the base64 alphabet.
    """
    standard = value.translate(str.maketrans("-_", "+/"))
    if not BASE64_PATTERN.match(standard):
        raise SDKException("Signed request contains malformed base64 encoding.", 608)

    standard = standard.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(standard + "=" * (-len(standard) % 4))
    except (binascii.Error, ValueError) as e:
        raise SDKException("Signed request contains malformed base64 encoding.", 608) from e


class SignedRequest:
    """A verified signed request payload.

    Attributes:
        raw_signed_request: The string as received, or None.
        payload: The decoded JSON payload, or None when nothing was parsed.
    """

    def __init__(self, app: FacebookApp, raw_signed_request: Optional[str] = None):
        self.app = app
        self.raw_signed_request = raw_signed_request
        self.payload: Optional[Dict[str, Any]] = None

        if raw_signed_request:
            self._parse()

    def _parse(self) -> None:
        encoded_sig, encoded_payload = self._split()

        sig = self._decode_signature(encoded_sig)
        self._validate_signature(self._hash_signature(encoded_payload), sig)

        self.payload = self._decode_payload(encoded_payload)
        self._validate_algorithm()

    def _split(self):
        if "." not in self.raw_signed_request:
            raise SDKException("Malformed signed request.", 606)
        return self.raw_signed_request.split(".", 1)

    @staticmethod
    def _decode_signature(encoded_sig: str) -> bytes:
        sig = base64_url_decode(encoded_sig)
        if not sig:
            raise SDKException("Signed request has malformed encoded signature data.", 607)
        return sig

    def _hash_signature(self, encoded_data: str) -> bytes:
        return hmac.new(
            self.app.secret.encode("utf-8"), encoded_data.encode("utf-8"), hashlib.sha256
        ).digest()

    @staticmethod
    def _validate_signature(hashed_sig: bytes, sig: bytes) -> None:
        if not hmac.compare_digest(hashed_sig, sig):
            raise SDKException("Signed request has an invalid signature.", 602)

    @staticmethod
    def _decode_payload(encoded_payload: str) -> Dict[str, Any]:
        raw = base64_url_decode(encoded_payload)
        try:
            payload = json.loads(raw) if raw else None
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            raise SDKException("Signed request has malformed encoded payload data.", 607)
        return payload

    def _validate_algorithm(self) -> None:
        if self.get("algorithm") != ALGORITHM:
            raise SDKException("Signed request is using the wrong algorithm.", 605)

    def get(self, key: str, default: Any = None) -> Any:
        if not self.payload or self.payload.get(key) is None:
            return default
        return self.payload[key]

    @property
    def user_id(self) -> Optional[str]:
        user_id = self.get("user_id")
        return str(user_id) if user_id is not None else None

    def has_oauth_data(self) -> bool:
        return bool(self.get("oauth_token") or self.get("code"))

    def make(self, payload: Dict[str, Any]) -> str:
        """Sign a payload with the app secret, adding algorithm and issued_at if missing."""
        payload = dict(payload)
        payload.setdefault("algorithm", ALGORITHM)
        payload.setdefault("issued_at", int(time.time()))

        encoded_payload = base64_url_encode(json.dumps(payload).encode("utf-8"))
        encoded_sig = base64_url_encode(self._hash_signature(encoded_payload))

        return f"{encoded_sig}.{encoded_payload}"
