"""
facebook_graph_sdk — Client SDK for the Facebook Graph API.

Modules:
  facebook          — Facebook facade (get/post/delete, pagination, batch, uploads)
  app               — FacebookApp credentials
  access_token      — AccessToken and AccessTokenMetadata
  oauth2_client     — Login dialog URLs, code/token exchange, debug_token
  request           — GraphRequest builder and request bodies
  client            — GraphClient transport dispatch
  http_client       — requests-based transport and GraphRawResponse
  response          — GraphResponse decoding and node casting
  batch             — BatchRequest / BatchResponse
  files             — GraphFile / GraphVideo upload sources
  resumable_upload  — Chunked video upload
  signed_request    — Signed request parsing and signing
  redirect_login    — Redirect login flow with CSRF state
  exceptions        — SDKException hierarchy and Graph error classification
  settings          — Constants and .env loading
"""

from .access_token import AccessToken, AccessTokenMetadata
from .app import FacebookApp
from .batch import BatchRequest, BatchResponse
from .client import GraphClient
from .exceptions import (
    AuthenticationException,
    AuthorizationException,
    ClientException,
    OtherException,
    ResponseException,
    ResumableUploadException,
    SDKException,
    ServerException,
    ThrottleException,
)
from .facebook import Facebook
from .files import GraphFile, GraphVideo
from .request import GraphRequest
from .response import GraphResponse
from .settings import DEFAULT_GRAPH_VERSION, VERSION, load_config

__version__ = VERSION

__all__ = [
    "AccessToken",
    "AccessTokenMetadata",
    "AuthenticationException",
    "AuthorizationException",
    "BatchRequest",
    "BatchResponse",
    "ClientException",
    "DEFAULT_GRAPH_VERSION",
    "Facebook",
    "FacebookApp",
    "GraphClient",
    "GraphFile",
    "GraphRequest",
    "GraphResponse",
    "GraphVideo",
    "OtherException",
    "ResponseException",
    "ResumableUploadException",
    "SDKException",
    "ServerException",
    "ThrottleException",
    "load_config",
]
