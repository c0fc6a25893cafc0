"""
HTTP Client — Pluggable transport used by GraphClient.

Any object implementing HttpClientInterface.send() can be passed as the
"http_client_handler" config value. The default is RequestsHttpClient,
built on a requests.Session.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

from .exceptions import SDKException


class GraphRawResponse:
    """Headers, body and status code exactly as received from the transport.

    headers may be a mapping or a raw header block. For a raw block only the
    last response is kept (redirects and proxies produce several) and the
    status code is taken from its status line. Header lookups are
    case-insensitive.
    """

    def __init__(
        self,
        headers: Union[Mapping[str, str], str],
        body: str,
        http_status_code: Optional[int] = None,
    ):
        self.headers = CaseInsensitiveDict()
        self.body = body
        self._http_status_code = None

        if isinstance(headers, str):
            self._set_headers_from_string(headers)
        else:
            self.headers.update(headers)

        if http_status_code:
            self._set_http_status_code(http_status_code)

    def _set_http_status_code(self, code: int) -> None:
        if code < 0:
            raise ValueError("'http_status_code' expects a value greater than 0")
        self._http_status_code = code

    def _set_headers_from_string(self, raw_headers: str) -> None:
        raw_headers = raw_headers.replace("\r\n", "\n")
        raw_header = raw_headers.strip().split("\n\n")[-1]

        for line in raw_header.split("\n"):
            if ": " not in line:
                self.set_http_status_code_from_header(line)
            else:
                key, value = line.split(": ", 1)
                self.headers[key] = value

    def set_http_status_code_from_header(self, raw_response_header: str) -> None:
        """Parse "HTTP/1.1 200 OK" style status lines."""
        parts = raw_response_header.split(" ", 2)
        try:
            code = int(parts[1]) if len(parts) > 1 else 0
        except ValueError:
            code = 0
        self._set_http_status_code(code)

    @property
    def http_status_code(self) -> int:
        return self._http_status_code or 0


class HttpClientInterface(ABC):
    @abstractmethod
    def send(
        self, url: str, method: str, body: Any, headers: Dict[str, str], timeout: int
    ) -> GraphRawResponse:
        """Send the request and return the raw response.

        Raises:
            SDKException: On any transport level failure.
        """


class RequestsHttpClient(HttpClientInterface):
    """Default transport backed by a requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def send(
        self, url: str, method: str, body: Any, headers: Dict[str, str], timeout: int
    ) -> GraphRawResponse:
        try:
            response = self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise SDKException(str(e)) from e

        return GraphRawResponse(response.headers, response.text, response.status_code)


def create_http_client(handler: Any = None) -> HttpClientInterface:
    """Resolve the "http_client_handler" config value to a transport.

    Raises:
        ValueError: If the handler is not a supported value.
    """
    if handler is None or handler == "requests":
        return RequestsHttpClient()

    if isinstance(handler, HttpClientInterface):
        return handler

    if isinstance(handler, requests.Session):
        return RequestsHttpClient(handler)

    raise ValueError(
        'The http client handler must be set to "requests", be an instance of '
        "requests.Session or an instance of HttpClientInterface"
    )
