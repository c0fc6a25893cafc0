"""
Graph Client — Sends GraphRequests over the configured HTTP transport.

Flow for one call:
    1. Validate the access token (plain GraphRequests only; batch and
       upload subclasses carry their own)
    2. Build the message: multipart/form-data when files are attached,
       x-www-form-urlencoded otherwise; video uploads go to graph-video
    3. Send with a timeout sized for the payload (60s / 3600s / 7200s)
    4. Wrap the raw response in a GraphResponse and raise its
       ResponseException if Graph returned an error envelope
"""

from typing import Any, Optional, Tuple

from .batch import BatchRequest, BatchResponse
from .http_client import HttpClientInterface, create_http_client
from .request import GraphRequest
from .response import GraphResponse

BASE_GRAPH_URL = "https://graph.facebook.com"
BASE_GRAPH_VIDEO_URL = "https://graph-video.facebook.com"
BASE_GRAPH_URL_BETA = "https://graph.beta.facebook.com"
BASE_GRAPH_VIDEO_URL_BETA = "https://graph-video.beta.facebook.com"

DEFAULT_REQUEST_TIMEOUT = 60
DEFAULT_FILE_UPLOAD_REQUEST_TIMEOUT = 3600
DEFAULT_VIDEO_UPLOAD_REQUEST_TIMEOUT = 7200


class GraphClient:
    """Transport-agnostic Graph API client.

    Attributes:
        http_client: The HttpClientInterface every request goes through.
        enable_beta_mode: Send requests to the graph.beta hosts.
        debug: If True, print one line per request sent.
    """

    # Total requests sent by every client in this process
    request_count = 0

    def __init__(
        self,
        http_client: Optional[HttpClientInterface] = None,
        enable_beta_mode: bool = False,
        debug: bool = False,
    ):
        self.http_client = http_client or create_http_client()
        self.enable_beta_mode = enable_beta_mode
        self.debug = debug

    def get_base_graph_url(self, post_to_video_url: bool = False) -> str:
        if post_to_video_url:
            return BASE_GRAPH_VIDEO_URL_BETA if self.enable_beta_mode else BASE_GRAPH_VIDEO_URL
        return BASE_GRAPH_URL_BETA if self.enable_beta_mode else BASE_GRAPH_URL

    def prepare_request_message(self, request: GraphRequest) -> Tuple[str, str, dict, Any]:
        """Return (url, method, headers, body) ready for the transport."""
        url = self.get_base_graph_url(request.contains_video_uploads()) + request.url

        if request.contains_file_uploads():
            request_body = request.multipart_body()
            request.set_headers({
                "Content-Type": f"multipart/form-data; boundary={request_body.boundary}",
            })
        else:
            request_body = request.url_encoded_body()
            request.set_headers({
                "Content-Type": "application/x-www-form-urlencoded",
            })

        return url, request.method, request.headers, request_body.body

    def send_request(self, request: GraphRequest) -> GraphResponse:
        """Send a request and return its response.

        Raises:
            SDKException: On a missing token or a transport failure.
            ResponseException: When Graph returns an error envelope.
        """
        if type(request) is GraphRequest:
            request.validate_access_token()

        url, method, headers, body = self.prepare_request_message(request)

        timeout = DEFAULT_REQUEST_TIMEOUT
        if request.contains_video_uploads():
            timeout = DEFAULT_VIDEO_UPLOAD_REQUEST_TIMEOUT
        elif request.contains_file_uploads():
            timeout = DEFAULT_FILE_UPLOAD_REQUEST_TIMEOUT

        if self.debug:
            print(f"  {method} {request.endpoint} (timeout {timeout}s)")

        raw_response = self.http_client.send(url, method, body, headers, timeout)

        GraphClient.request_count += 1

        response = GraphResponse(
            request,
            raw_response.body,
            raw_response.http_status_code,
            raw_response.headers,
        )

        if self.debug:
            print(f"  HTTP {response.http_status_code}, request #{GraphClient.request_count}")

        if response.is_error():
            raise response.thrown_exception

        return response

    def send_batch_request(self, batch_request: BatchRequest) -> BatchResponse:
        batch_request.prepare_requests_for_batch()
        response = self.send_request(batch_request)

        if self.debug:
            print(f"  Batch of {len(batch_request)} requests sent")

        return BatchResponse(batch_request, response)
