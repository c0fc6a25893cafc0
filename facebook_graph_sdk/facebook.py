"""
Facebook — Entry point that wires an app, a client and the default token.

Configuration keys (explicit config wins over the environment):

    app_id                          FACEBOOK_APP_ID (required)
    app_secret                      FACEBOOK_APP_SECRET (required)
    default_graph_version           FACEBOOK_APP_GRAPH_VERSION (required)
    enable_beta_mode                send to graph.beta.facebook.com
    http_client_handler             "requests", a requests.Session or an HttpClientInterface
    persistent_data_handler         "memory" or a PersistentDataInterface
    pseudo_random_string_generator  "secrets" or a PseudoRandomStringGeneratorInterface
    default_access_token            str or AccessToken used when a call passes none
    debug                           print one line per request

Typical usage:
    fb = Facebook(load_config())
    me = fb.get("/me", "{access-token}").get_graph_user()
    friends = fb.get("/me/friends").get_graph_edge()
    while friends is not None:
        ...
        friends = fb.next(friends)
"""

import os
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .access_token import AccessToken
from .app import FacebookApp
from .batch import BatchRequest, BatchResponse
from .client import GraphClient
from .exceptions import SDKException
from .files import GraphFile, GraphVideo
from .graph_nodes import GraphEdge
from .http_client import create_http_client
from .oauth2_client import OAuth2Client
from .persistent_data import create_persistent_data_handler
from .random_string import create_pseudo_random_string_generator
from .redirect_login import RedirectLoginHelper
from .request import GraphRequest
from .response import GraphResponse
from .resumable_upload import ResumableUploader, TransferChunk
from .settings import (
    APP_GRAPH_VERSION_ENV_NAME,
    APP_ID_ENV_NAME,
    APP_SECRET_ENV_NAME,
)
from .signed_request_helpers import CanvasHelper, JavaScriptHelper, PageTabHelper

DEFAULT_MAX_TRANSFER_TRIES = 5


class Facebook:
    """Graph API facade.

    Attributes:
        app: The FacebookApp built from app_id/app_secret.
        client: The GraphClient every call goes through.
        persistent_data_handler: Storage for the login CSRF state.
        pseudo_random_string_generator: Source of CSRF state values.
        debug: Whether verbose output is enabled.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Build the app and client from config, falling back to FACEBOOK_* variables.

        Raises:
            SDKException: If app_id, app_secret or default_graph_version is missing.
            ValueError: If a handler config value is not supported.
        """
        config = {
            "app_id": os.getenv(APP_ID_ENV_NAME),
            "app_secret": os.getenv(APP_SECRET_ENV_NAME),
            "default_graph_version": os.getenv(APP_GRAPH_VERSION_ENV_NAME),
            "enable_beta_mode": False,
            "http_client_handler": None,
            "persistent_data_handler": None,
            "pseudo_random_string_generator": None,
            "default_access_token": None,
            "debug": False,
            **(config or {}),
        }

        if not config["app_id"]:
            raise SDKException(f'Required "app_id" key not supplied in config and could not find fallback environment variable "{APP_ID_ENV_NAME}"')
        if not config["app_secret"]:
            raise SDKException(f'Required "app_secret" key not supplied in config and could not find fallback environment variable "{APP_SECRET_ENV_NAME}"')
        if not config["default_graph_version"]:
            raise SDKException('Required "default_graph_version" key not supplied in config')

        self.debug = bool(config["debug"])
        self.app = FacebookApp(config["app_id"], config["app_secret"])
        self.client = GraphClient(
            create_http_client(config["http_client_handler"]),
            bool(config["enable_beta_mode"]),
            self.debug,
        )
        self.persistent_data_handler = create_persistent_data_handler(config["persistent_data_handler"])
        self.pseudo_random_string_generator = create_pseudo_random_string_generator(
            config["pseudo_random_string_generator"]
        )

        self._default_access_token: Optional[AccessToken] = None
        if config["default_access_token"]:
            self.default_access_token = config["default_access_token"]

        self._default_graph_version = config["default_graph_version"]
        self._oauth2_client: Optional[OAuth2Client] = None
        self._last_response: Optional[GraphResponse] = None

        if self.debug:
            print(f"  Facebook app {self.app.id} ready (Graph {self._default_graph_version})")

    @property
    def last_response(self) -> Optional[GraphResponse]:
        """The response of the most recent call made through this instance."""
        return self._last_response

    @property
    def default_access_token(self) -> Optional[AccessToken]:
        return self._default_access_token

    @default_access_token.setter
    def default_access_token(self, access_token: Union[AccessToken, str]) -> None:
        if isinstance(access_token, str):
            access_token = AccessToken(access_token)
        if not isinstance(access_token, AccessToken):
            raise TypeError("The default access token must be of type str or AccessToken")
        self._default_access_token = access_token

    @property
    def default_graph_version(self) -> str:
        return self._default_graph_version

    def get_oauth2_client(self) -> OAuth2Client:
        if self._oauth2_client is None:
            self._oauth2_client = OAuth2Client(
                self.app, self.client, self._default_graph_version, self.debug
            )
        return self._oauth2_client

    def get_redirect_login_helper(self) -> RedirectLoginHelper:
        return RedirectLoginHelper(
            self.get_oauth2_client(),
            self.persistent_data_handler,
            self.pseudo_random_string_generator,
        )

    def get_canvas_helper(self, post_data: Optional[Mapping[str, Any]] = None) -> CanvasHelper:
        return CanvasHelper(self.app, self.client, self._default_graph_version, post_data=post_data)

    def get_javascript_helper(self, cookies: Optional[Mapping[str, Any]] = None) -> JavaScriptHelper:
        return JavaScriptHelper(self.app, self.client, self._default_graph_version, cookies=cookies)

    def get_page_tab_helper(self, post_data: Optional[Mapping[str, Any]] = None) -> PageTabHelper:
        return PageTabHelper(self.app, self.client, self._default_graph_version, post_data=post_data)

    def get(
        self,
        endpoint: str,
        access_token: Union[AccessToken, str, None] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> GraphResponse:
        return self.send_request("GET", endpoint, {}, access_token, e_tag, graph_version)

    def post(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        access_token: Union[AccessToken, str, None] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> GraphResponse:
        return self.send_request("POST", endpoint, params, access_token, e_tag, graph_version)

    def delete(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        access_token: Union[AccessToken, str, None] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> GraphResponse:
        return self.send_request("DELETE", endpoint, params, access_token, e_tag, graph_version)

    def next(self, graph_edge: GraphEdge) -> Optional[GraphEdge]:
        """The page after graph_edge, or None at the end."""
        return self.get_pagination_results(graph_edge, "next")

    def previous(self, graph_edge: GraphEdge) -> Optional[GraphEdge]:
        """The page before graph_edge, or None at the start."""
        return self.get_pagination_results(graph_edge, "previous")

    def get_pagination_results(self, graph_edge: GraphEdge, direction: str) -> Optional[GraphEdge]:
        """Fetch the neighbouring page, cast with the same node subclass.

        Raises:
            SDKException: (720) If the edge did not come from a GET request.
        """
        pagination_request = graph_edge.get_pagination_request(direction)
        if pagination_request is None:
            return None

        self._last_response = self.client.send_request(pagination_request)

        new_edge = self._last_response.get_graph_edge(graph_edge.subclass_name)

        return new_edge if len(new_edge) > 0 else None

    def send_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        access_token: Union[AccessToken, str, None] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> GraphResponse:
        request = self.request(method, endpoint, params, access_token, e_tag, graph_version)

        self._last_response = self.client.send_request(request)
        return self._last_response

    def send_batch_request(
        self,
        requests: Union[Iterable[GraphRequest], Dict[str, GraphRequest]],
        access_token: Union[AccessToken, str, None] = None,
        graph_version: Optional[str] = None,
    ) -> BatchResponse:
        batch_request = BatchRequest(
            self.app,
            requests,
            access_token or self._default_access_token,
            graph_version or self._default_graph_version,
        )

        self._last_response = self.client.send_batch_request(batch_request)
        return self._last_response

    def new_batch_request(
        self,
        access_token: Union[AccessToken, str, None] = None,
        graph_version: Optional[str] = None,
    ) -> BatchRequest:
        return BatchRequest(
            self.app,
            None,
            access_token or self._default_access_token,
            graph_version or self._default_graph_version,
        )

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        access_token: Union[AccessToken, str, None] = None,
        e_tag: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> GraphRequest:
        """Build (but do not send) a request with this instance's defaults."""
        return GraphRequest(
            self.app,
            access_token or self._default_access_token,
            method,
            endpoint,
            params or {},
            e_tag,
            graph_version or self._default_graph_version,
        )

    @staticmethod
    def file_to_upload(path_to_file: str) -> GraphFile:
        return GraphFile(path_to_file)

    @staticmethod
    def video_to_upload(path_to_file: str) -> GraphVideo:
        return GraphVideo(path_to_file)

    def upload_video(
        self,
        target: str,
        path_to_file: str,
        metadata: Optional[Dict[str, Any]] = None,
        access_token: Union[AccessToken, str, None] = None,
        max_transfer_tries: int = DEFAULT_MAX_TRANSFER_TRIES,
        graph_version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Upload a video to /{target}/videos in chunks.

        Each chunk gets max_transfer_tries retries on resumable errors; the
        last try lets the error propagate.

        Returns:
            {"video_id": ..., "success": bool}
        """
        uploader = ResumableUploader(
            self.app,
            self.client,
            access_token or self._default_access_token,
            graph_version or self._default_graph_version,
            self.debug,
        )
        endpoint = f"/{target}/videos"
        video = self.video_to_upload(path_to_file)

        chunk = uploader.start(endpoint, video)
        while not chunk.is_last_chunk():
            chunk = self._max_tries_transfer(uploader, endpoint, chunk, max_transfer_tries)

        return {
            "video_id": chunk.video_id,
            "success": uploader.finish(endpoint, chunk.upload_session_id, metadata),
        }

    def _max_tries_transfer(
        self,
        uploader: ResumableUploader,
        endpoint: str,
        chunk: TransferChunk,
        retry_countdown: int,
    ) -> TransferChunk:
        while True:
            new_chunk = uploader.transfer(endpoint, chunk, retry_countdown < 1)
            if new_chunk is not chunk:
                return new_chunk

            retry_countdown -= 1
            if self.debug:
                print(f"  Retrying chunk at offset {chunk.start_offset} ({retry_countdown} tries left)")
