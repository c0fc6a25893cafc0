"""
Access Token — Token entity and the metadata returned by /debug_token.

An AccessToken wraps the raw token string plus an optional expiry. It is
used for user, page and app tokens alike; app tokens are recognised by the
"{app_id}|{app_secret}" form.

AccessTokenMetadata wraps the "data" object of a /debug_token response:

    {
      "data": {
        "app_id": "123", "application": "My App", "user_id": "456",
        "is_valid": true, "issued_at": 1600000000, "expires_at": 1700000000,
        "scopes": ["email", "public_profile"],
        "metadata": {"sso": "ios", "auth_type": "rerequest"}
      }
    }
"""

import hashlib
import hmac
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import SDKException

LONG_LIVED_THRESHOLD_SECONDS = 60 * 60 * 2


def timestamp_to_datetime(timestamp: Any) -> datetime:
    """Convert a unix timestamp (int, float or numeric string) to an aware UTC datetime."""
    return datetime.fromtimestamp(float(timestamp), timezone.utc)


class AccessToken:
    """A Graph access token.

    Attributes:
        value: The raw token string.
        expires_at: Aware UTC datetime when the token expires, or None if unknown.
    """

    def __init__(self, value: str, expires_at: int = 0):
        self.value = value
        self.expires_at = timestamp_to_datetime(expires_at) if expires_at else None

    def app_secret_proof(self, app_secret: str) -> str:
        """HMAC-SHA256 of the token keyed by the app secret (hex digest)."""
        return hmac.new(
            app_secret.encode("utf-8"), self.value.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def is_app_access_token(self) -> bool:
        return "|" in self.value

    def is_long_lived(self) -> bool:
        """True when the token outlives the next two hours, or is an app token."""
        if self.expires_at:
            return self.expires_at.timestamp() > time.time() + LONG_LIVED_THRESHOLD_SECONDS

        return self.is_app_access_token()

    def is_expired(self) -> Optional[bool]:
        """True/False when the expiry is known, None otherwise.

        App access tokens never expire.
        """
        if self.expires_at:
            return self.expires_at.timestamp() < time.time()

        if self.is_app_access_token():
            return False

        return None

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AccessToken(expires_at={self.expires_at!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AccessToken):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


class AccessTokenMetadata:
    """Metadata about an access token as reported by /debug_token."""

    DATE_PROPERTIES = ("expires_at", "issued_at")

    def __init__(self, metadata: Dict[str, Any]):
        if not isinstance(metadata, dict) or "data" not in metadata:
            raise SDKException("Unexpected debug token response data.", 401)

        self.metadata = dict(metadata["data"])

        for key in self.DATE_PROPERTIES:
            value = self.metadata.get(key)
            if value:
                self.metadata[key] = timestamp_to_datetime(value)

    def get_field(self, field: str, default: Any = None) -> Any:
        value = self.metadata.get(field)
        return default if value is None else value

    def get_child_property(self, parent_field: str, field: str, default: Any = None) -> Any:
        parent = self.metadata.get(parent_field)
        if not isinstance(parent, dict) or parent.get(field) is None:
            return default
        return parent[field]

    def get_error_property(self, field: str, default: Any = None) -> Any:
        return self.get_child_property("error", field, default)

    def get_metadata_property(self, field: str, default: Any = None) -> Any:
        return self.get_child_property("metadata", field, default)

    def is_error(self) -> bool:
        return self.get_field("error") is not None

    @property
    def error_code(self) -> Optional[int]:
        return _optional_int(self.get_error_property("code"))

    @property
    def error_message(self) -> Optional[str]:
        message = self.get_error_property("message")
        return str(message) if message else None

    @property
    def error_subcode(self) -> Optional[int]:
        return _optional_int(self.get_error_property("subcode"))

    @property
    def application(self) -> Optional[str]:
        application = self.get_field("application")
        return str(application) if application else None

    @property
    def app_id(self) -> Optional[str]:
        app_id = self.get_field("app_id")
        return str(app_id) if app_id else None

    @property
    def user_id(self) -> Optional[str]:
        return self.get_field("user_id")

    @property
    def is_valid(self) -> bool:
        return bool(self.get_field("is_valid"))

    @property
    def issued_at(self) -> Optional[datetime]:
        return self.get_field("issued_at")

    @property
    def expires_at(self) -> Optional[datetime]:
        return self.get_field("expires_at")

    @property
    def scopes(self) -> Optional[List[str]]:
        return self.get_field("scopes")

    @property
    def profile_id(self) -> Optional[str]:
        return self.get_field("profile_id")

    @property
    def sso(self) -> Optional[str]:
        return self.get_metadata_property("sso")

    @property
    def auth_type(self) -> Optional[str]:
        return self.get_metadata_property("auth_type")

    @property
    def auth_nonce(self) -> Optional[str]:
        return self.get_metadata_property("auth_nonce")

    def validate_app_id(self, app_id: str) -> None:
        if self.app_id != app_id:
            raise SDKException("Access token metadata contains unexpected app ID.", 401)

    def validate_user_id(self, user_id: str) -> None:
        if self.user_id != user_id:
            raise SDKException("Access token metadata contains unexpected user ID.", 401)

    def validate_expiration(self) -> None:
        """Raise if the token has expired. Tokens without an expiry always pass."""
        if not isinstance(self.expires_at, datetime):
            return

        if self.expires_at.timestamp() < time.time():
            raise SDKException(
                "Inspection of access token metadata shows that the access token has expired.",
                401,
            )


def _optional_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
