"""
OAuth2 Client — Login dialog URLs, code exchange and token inspection.

Token endpoints used:
    GET /oauth/access_token   code -> short-lived token, or
                              fb_exchange_token -> long-lived token
    GET /oauth/client_code    long-lived token -> code (for client devices)
    GET /debug_token          token metadata (queried with the app token)
"""

import time
from typing import Any, Dict, Iterable, Optional, Union

from .access_token import AccessToken, AccessTokenMetadata
from .app import FacebookApp
from .client import GraphClient
from .exceptions import SDKException
from .request import GraphRequest
from .response import GraphResponse
from .settings import DEFAULT_GRAPH_VERSION, SDK_USER_AGENT
from .url_manipulator import build_query

BASE_AUTHORIZATION_URL = "https://www.facebook.com"


class OAuth2Client:
    """OAuth 2.0 flows for a FacebookApp.

    Attributes:
        last_request: The most recent GraphRequest sent, for inspection.
    """

    def __init__(
        self,
        app: FacebookApp,
        client: GraphClient,
        graph_version: Optional[str] = None,
        debug: bool = False,
    ):
        self.app = app
        self.client = client
        self.graph_version = graph_version or DEFAULT_GRAPH_VERSION
        self.debug = debug
        self.last_request: Optional[GraphRequest] = None

    def debug_token(self, access_token: Union[AccessToken, str]) -> AccessTokenMetadata:
        """Inspect a token with the app access token."""
        params = {"input_token": str(access_token)}

        self.last_request = GraphRequest(
            self.app,
            self.app.access_token,
            "GET",
            "/debug_token",
            params,
            None,
            self.graph_version,
        )
        response = self.client.send_request(self.last_request)

        return AccessTokenMetadata(response.decoded_body)

    def get_authorization_url(
        self,
        redirect_url: str,
        state: str,
        scope: Iterable[str] = (),
        params: Optional[Dict[str, Any]] = None,
        separator: str = "&",
    ) -> str:
        """URL of the login dialog. Extra params override the defaults."""
        query = {
            "client_id": self.app.id,
            "state": state,
            "response_type": "code",
            "sdk": SDK_USER_AGENT,
            "redirect_uri": redirect_url,
            "scope": ",".join(scope),
        }
        query.update(params or {})

        return (
            f"{BASE_AUTHORIZATION_URL}/{self.graph_version}/dialog/oauth?"
            f"{build_query(query, separator)}"
        )

    def get_access_token_from_code(self, code: str, redirect_uri: str = "") -> AccessToken:
        params = {
            "code": code,
            "redirect_uri": redirect_uri,
        }

        if self.debug:
            print("  Exchanging authorization code for an access token")

        return self._request_an_access_token(params)

    def get_long_lived_access_token(self, access_token: Union[AccessToken, str]) -> AccessToken:
        params = {
            "grant_type": "fb_exchange_token",
            "fb_exchange_token": str(access_token),
        }

        if self.debug:
            print("  Exchanging short-lived token for a long-lived token")

        return self._request_an_access_token(params)

    def get_code_from_long_lived_access_token(
        self, access_token: Union[AccessToken, str], redirect_uri: str = ""
    ) -> str:
        """Exchange a long-lived token for a code usable on a client device.

        Raises:
            SDKException: (401) when Graph returns no code.
        """
        params = {"redirect_uri": redirect_uri}
        response = self._send_request_with_client_params("/oauth/client_code", params, access_token)

        data = response.decoded_body
        if not isinstance(data, dict) or not data.get("code"):
            raise SDKException("Code was not returned from Graph.", 401)

        return str(data["code"])

    def _request_an_access_token(self, params: Dict[str, Any]) -> AccessToken:
        response = self._send_request_with_client_params("/oauth/access_token", params)
        data = response.decoded_body

        if not isinstance(data, dict) or not data.get("access_token"):
            raise SDKException("Access token was not returned from Graph.", 401)

        # "expires" when exchanging for a long-lived token, "expires_in" for a code
        expires_at = 0
        if data.get("expires"):
            expires_at = int(time.time()) + int(data["expires"])
        elif data.get("expires_in"):
            expires_at = int(time.time()) + int(data["expires_in"])

        return AccessToken(str(data["access_token"]), expires_at)

    def _send_request_with_client_params(
        self,
        endpoint: str,
        params: Dict[str, Any],
        access_token: Union[AccessToken, str, None] = None,
    ) -> GraphResponse:
        # Caller params win over the client credentials
        params = {**self._client_params(), **params}
        access_token = access_token or self.app.access_token

        self.last_request = GraphRequest(
            self.app,
            access_token,
            "GET",
            endpoint,
            params,
            None,
            self.graph_version,
        )
        return self.client.send_request(self.last_request)

    def _client_params(self) -> Dict[str, str]:
        return {
            "client_id": self.app.id,
            "client_secret": self.app.secret,
        }
