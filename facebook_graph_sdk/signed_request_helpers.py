"""
Signed request helpers — Pull a signed request out of the incoming HTTP input.

    CanvasHelper      POST field "signed_request" (canvas apps)
    PageTabHelper     POST field "signed_request" plus the "page" object
    JavaScriptHelper  cookie "fbsr_{app_id}" set by the JavaScript SDK

The web framework's request data is passed in explicitly:

    helper = fb.get_canvas_helper(post_data=request.form)
    token = helper.get_access_token()
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .access_token import AccessToken
from .app import FacebookApp
from .client import GraphClient
from .oauth2_client import OAuth2Client
from .settings import DEFAULT_GRAPH_VERSION
from .signed_request import SignedRequest
from .type_mapping import map_type


class SignedRequestFromInputHelper(ABC):
    """Base for helpers that read a signed request from request input."""

    def __init__(
        self,
        app: FacebookApp,
        client: GraphClient,
        graph_version: Optional[str] = None,
        post_data: Optional[Mapping[str, Any]] = None,
        cookies: Optional[Mapping[str, Any]] = None,
    ):
        self.app = app
        self.post_data = post_data or {}
        self.cookies = cookies or {}
        self.oauth2_client = OAuth2Client(app, client, graph_version or DEFAULT_GRAPH_VERSION)
        self.signed_request: Optional[SignedRequest] = None

        self.instantiate_signed_request()

    def instantiate_signed_request(self, raw_signed_request: Optional[str] = None) -> None:
        raw_signed_request = raw_signed_request or self.get_raw_signed_request()
        if not raw_signed_request:
            return
        self.signed_request = SignedRequest(self.app, raw_signed_request)

    @abstractmethod
    def get_raw_signed_request(self) -> Optional[str]:
        ...

    def get_access_token(self) -> Optional[AccessToken]:
        """The user token carried by the signed request.

        A bare "code" is exchanged through OAuth; an "oauth_token" is wrapped
        directly with its "expires" timestamp.
        """
        if self.signed_request is None or not self.signed_request.has_oauth_data():
            return None

        code = map_type(self.signed_request.get("code"), "str")
        access_token = map_type(self.signed_request.get("oauth_token"), "str")

        if code and not access_token:
            return self.oauth2_client.get_access_token_from_code(code)

        expires_at = map_type(self.signed_request.get("expires"), "int", 0)
        return AccessToken(access_token, expires_at)

    @property
    def user_id(self) -> Optional[str]:
        return self.signed_request.user_id if self.signed_request else None

    def get_raw_signed_request_from_post(self) -> Optional[str]:
        return map_type(self.post_data.get("signed_request"), "str")

    def get_raw_signed_request_from_cookie(self) -> Optional[str]:
        return map_type(self.cookies.get(f"fbsr_{self.app.id}"), "str")


class CanvasHelper(SignedRequestFromInputHelper):
    @property
    def app_data(self) -> Any:
        """The "app_data" query param forwarded by the canvas page."""
        return self.signed_request.get("app_data") if self.signed_request else None

    def get_raw_signed_request(self) -> Optional[str]:
        return self.get_raw_signed_request_from_post()


class JavaScriptHelper(SignedRequestFromInputHelper):
    def get_raw_signed_request(self) -> Optional[str]:
        return self.get_raw_signed_request_from_cookie()


class PageTabHelper(CanvasHelper):
    def __init__(self, *args, **kwargs):
        self.page_data: Mapping[str, Any] = {}
        super().__init__(*args, **kwargs)

        if self.signed_request is not None:
            self.page_data = map_type(self.signed_request.get("page"), "dict", {})

    def get_page_data(self, key: str, default: Any = None) -> Any:
        value = self.page_data.get(key)
        return default if value is None else value

    def is_admin(self) -> bool:
        return map_type(self.get_page_data("admin"), "bool")

    @property
    def page_id(self) -> Optional[str]:
        return map_type(self.get_page_data("id"), "str")
