"""
Graph Request — Builder for a single Graph API call.

A GraphRequest holds the method, endpoint, params, files and access token
for one call and knows how to render itself as a URL plus a body:

    request = GraphRequest(app, token, "GET", "/me", {"fields": "id,name"})
    request.url      # "/v15.0/me?fields=id%2Cname&access_token=...&appsecret_proof=..."

Access tokens may arrive three ways (constructor, "access_token" param or
an access_token query string on the endpoint); they must agree. The token
and its appsecret_proof are always re-added by the params getter and are
never stored with the caller's params.
"""

import copy
from typing import Any, Dict, Optional, Union

import urllib3

from .access_token import AccessToken
from .app import FacebookApp
from .exceptions import SDKException
from .files import GraphFile, GraphVideo
from .settings import DEFAULT_GRAPH_VERSION, SDK_USER_AGENT
from .url_manipulator import (
    append_params_to_url,
    build_query,
    flatten_params,
    force_slash_prefix,
    get_params_as_dict,
    remove_params_from_url,
)

ALLOWED_METHODS = ("GET", "POST", "DELETE")
AUTH_PARAMS = ("access_token", "appsecret_proof")


class RequestBodyUrlEncoded:
    """application/x-www-form-urlencoded body."""

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        self.params = params or {}

    @property
    def body(self) -> str:
        return build_query(self.params)


class RequestBodyMultipart:
    """multipart/form-data body with the params first and the files after."""

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, GraphFile]] = None,
        boundary: Optional[str] = None,
    ):
        self.params = params or {}
        self.files = files or {}
        self.boundary = boundary or urllib3.filepost.choose_boundary()

    @property
    def body(self) -> bytes:
        fields = list(flatten_params(self.params))
        for name, graph_file in self.files.items():
            fields.append((name, (graph_file.file_name, graph_file.contents, graph_file.mimetype)))

        body, _ = urllib3.encode_multipart_formdata(fields, boundary=self.boundary)
        return body


class GraphRequest:
    """A single call to the Graph API.

    Attributes:
        app: The FacebookApp used for the appsecret_proof.
        e_tag: Sent as If-None-Match when set.
        graph_version: Version prefix for the URL, e.g. "v15.0".
        files: GraphFiles pulled out of the params, keyed by param name.
    """

    def __init__(
        self,
        app: Optional[FacebookApp] = None,
        access_token: Union[AccessToken, str, None] = None,
        method: Optional[str] = None,
        endpoint: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ):
        self.app = app
        self._access_token = None
        self._method = None
        self._endpoint = ""
        self._headers: Dict[str, str] = {}
        self._params: Dict[str, Any] = {}
        self.files: Dict[str, GraphFile] = {}

        self.access_token = access_token
        self.method = method
        self.endpoint = endpoint or ""
        self.set_params(params or {})
        self.e_tag = e_tag
        self.graph_version = graph_version or DEFAULT_GRAPH_VERSION

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @access_token.setter
    def access_token(self, access_token: Union[AccessToken, str, None]) -> None:
        if isinstance(access_token, AccessToken):
            access_token = access_token.value
        self._access_token = access_token or None

    def set_access_token_from_params(self, access_token: str) -> None:
        """Adopt a token found in params/endpoint, or raise if it contradicts ours."""
        if not self._access_token:
            self.access_token = access_token
        elif access_token != self._access_token:
            raise SDKException(
                "Access token mismatch. The access token provided in the GraphRequest "
                "and the one provided in the URL or POST params do not match."
            )

    @property
    def access_token_entity(self) -> Optional[AccessToken]:
        return AccessToken(self._access_token) if self._access_token else None

    def validate_access_token(self) -> None:
        if not self._access_token:
            raise SDKException("You must provide an access token.")

    @property
    def app_secret_proof(self) -> Optional[str]:
        token = self.access_token_entity
        if token is None or self.app is None:
            return None
        return token.app_secret_proof(self.app.secret)

    @property
    def method(self) -> Optional[str]:
        return self._method

    @method.setter
    def method(self, method: Optional[str]) -> None:
        self._method = method.upper() if method else None

    def validate_method(self) -> None:
        if not self._method:
            raise SDKException("HTTP method not specified.")
        if self._method not in ALLOWED_METHODS:
            raise SDKException("Invalid HTTP method specified.")

    @property
    def endpoint(self) -> str:
        """Always slash-prefixed; "/" for batch requests."""
        return self._endpoint

    @endpoint.setter
    def endpoint(self, endpoint: str) -> None:
        params = get_params_as_dict(endpoint)
        if params.get("access_token"):
            self.set_access_token_from_params(params["access_token"])

        self._endpoint = force_slash_prefix(remove_params_from_url(endpoint, AUTH_PARAMS)) or "/"

    @property
    def headers(self) -> Dict[str, str]:
        headers = dict(self._headers)
        headers.update(self.default_headers())
        if self.e_tag:
            headers["If-None-Match"] = self.e_tag
        return headers

    def set_headers(self, headers: Dict[str, str]) -> None:
        self._headers.update(headers)

    @staticmethod
    def default_headers() -> Dict[str, str]:
        return {
            "User-Agent": SDK_USER_AGENT,
            "Accept-Encoding": "*",
        }

    @property
    def params(self) -> Dict[str, Any]:
        """The caller's params plus access_token/appsecret_proof when a token is set."""
        params = dict(self._params)
        if self._access_token:
            params["access_token"] = self._access_token
            params["appsecret_proof"] = self.app_secret_proof
        return params

    def set_params(self, params: Dict[str, Any]) -> None:
        """Merge params in, harvesting the token and pulling out files."""
        params = dict(params)
        if params.get("access_token"):
            self.set_access_token_from_params(str(params["access_token"]))

        for key in AUTH_PARAMS:
            params.pop(key, None)

        self.dangerously_set_params(self.sanitize_file_params(params))

    def dangerously_set_params(self, params: Dict[str, Any]) -> None:
        """Merge params without any token or file handling."""
        self._params.update(params)

    def sanitize_file_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        for key in [k for k, v in params.items() if isinstance(v, GraphFile)]:
            self.add_file(key, params.pop(key))
        return params

    def add_file(self, key: str, graph_file: GraphFile) -> None:
        self.files[key] = graph_file

    def reset_files(self) -> None:
        self.files = {}

    def contains_file_uploads(self) -> bool:
        return bool(self.files)

    def contains_video_uploads(self) -> bool:
        return any(isinstance(f, GraphVideo) for f in self.files.values())

    @property
    def post_params(self) -> Dict[str, Any]:
        return self.params if self._method == "POST" else {}

    def url_encoded_body(self) -> RequestBodyUrlEncoded:
        return RequestBodyUrlEncoded(self.post_params)

    def multipart_body(self) -> RequestBodyMultipart:
        return RequestBodyMultipart(self.post_params, self.files)

    @property
    def url(self) -> str:
        """Relative URL ("/{version}/{endpoint}"); non-POST params go in the query string."""
        self.validate_method()

        url = f"{force_slash_prefix(self.graph_version)}{force_slash_prefix(self._endpoint)}"

        if self._method != "POST":
            url = append_params_to_url(url, self.params)

        return url

    def clone(self) -> "GraphRequest":
        cloned = copy.copy(self)
        cloned._headers = dict(self._headers)
        cloned._params = dict(self._params)
        cloned.files = dict(self.files)
        return cloned

    def __repr__(self) -> str:
        return f"{type(self).__name__}(method={self._method!r}, endpoint={self._endpoint!r})"
