"""
Batch — Up to 50 Graph requests sent as one POST.

    batch = fb.new_batch_request()
    batch.add(fb.request("GET", "/me"), "me")
    batch.add(fb.request("GET", "/me/likes"), {"name": "likes", "omit_response_on_success": False})
    responses = fb.client.send_batch_request(batch)
    responses["me"].get_graph_user()

Each child is serialized as:

    {"headers": ["User-Agent: ..."], "method": "GET",
     "relative_url": "/v15.0/me?...", "body": "...", "name": "me"}

Files attached to child requests are moved to the root multipart request
under generated names and referenced through "attached_files".
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .access_token import AccessToken
from .app import FacebookApp
from .exceptions import SDKException
from .random_string import generate_pseudo_random_string
from .request import GraphRequest
from .response import GraphResponse

MAX_BATCH_REQUESTS = 50


@dataclass
class BatchRequestEntry:
    """A child request with its batch name and extra batch options."""
    request: GraphRequest
    name: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    attached_files: Optional[str] = None


class BatchRequest(GraphRequest):
    """A POST to the Graph root carrying child requests in the "batch" param."""

    def __init__(
        self,
        app: Optional[FacebookApp] = None,
        requests: Union[List[GraphRequest], Dict[str, GraphRequest], GraphRequest, None] = None,
        access_token: Union[AccessToken, str, None] = None,
        graph_version: Optional[str] = None,
    ):
        super().__init__(app, access_token, "POST", "", {}, None, graph_version)
        self.requests: List[BatchRequestEntry] = []
        if requests:
            self.add(requests)

    def add(self, request: Any, name_or_options: Union[str, Dict[str, Any], None] = None) -> "BatchRequest":
        """Add a request, a list of requests, or a dict of name -> request.

        Requests in a list are named by their position ("0", "1", ...).

        Raises:
            TypeError: If request is not a GraphRequest, list or dict.
            SDKException: If the child has no app/token and the batch has none either.
        """
        if isinstance(request, dict):
            for name, child in request.items():
                self.add(child, name)
            return self

        if isinstance(request, (list, tuple)):
            for index, child in enumerate(request):
                self.add(child, str(index))
            return self

        if not isinstance(request, GraphRequest):
            raise TypeError("Argument for add() must be a GraphRequest, list or dict.")

        if name_or_options is None:
            options = {}
        elif isinstance(name_or_options, dict):
            options = dict(name_or_options)
        else:
            options = {"name": name_or_options}

        self.add_fallback_defaults(request)
        attached_files = self.extract_file_attachments(request)

        name = options.pop("name", None)
        self.requests.append(BatchRequestEntry(request, name, options, attached_files))
        return self

    def add_fallback_defaults(self, request: GraphRequest) -> None:
        if request.app is None:
            if self.app is None:
                raise SDKException("Missing FacebookApp on GraphRequest and no fallback detected on BatchRequest.")
            request.app = self.app

        if not request.access_token:
            if not self.access_token:
                raise SDKException("Missing access token on GraphRequest and no fallback detected on BatchRequest.")
            request.access_token = self.access_token

    def extract_file_attachments(self, request: GraphRequest) -> Optional[str]:
        """Move the child's files to the batch root; return their comma-joined names."""
        if not request.contains_file_uploads():
            return None

        file_names = []
        for graph_file in request.files.values():
            file_name = f"file{generate_pseudo_random_string(12)}"
            self.add_file(file_name, graph_file)
            file_names.append(file_name)

        request.reset_files()

        return ",".join(file_names)

    def validate_batch_request_count(self) -> None:
        if not self.requests:
            raise SDKException("There are no batch requests to send.")
        if len(self.requests) > MAX_BATCH_REQUESTS:
            raise SDKException(f"You cannot send more than {MAX_BATCH_REQUESTS} batch requests at a time.")

    def prepare_requests_for_batch(self) -> None:
        self.validate_batch_request_count()
        self.set_params({
            "batch": self.convert_requests_to_json(),
            "include_headers": True,
        })

    def convert_requests_to_json(self) -> str:
        batch = []
        for entry in self.requests:
            options = dict(entry.options)
            if entry.name is not None:
                options["name"] = entry.name
            batch.append(self.request_entity_to_batch_array(entry.request, options, entry.attached_files))
        return json.dumps(batch)

    @staticmethod
    def request_entity_to_batch_array(
        request: GraphRequest,
        options: Union[str, Dict[str, Any], None] = None,
        attached_files: Optional[str] = None,
    ) -> Dict[str, Any]:
        if options is None:
            options = {}
        elif not isinstance(options, dict):
            options = {"name": options}

        batch = {
            "headers": [f"{name}: {value}" for name, value in request.headers.items()],
            "method": request.method,
            "relative_url": request.url,
        }

        # Child requests are always URL-encoded; their files live on the batch root
        body = request.url_encoded_body().body
        if body:
            batch["body"] = body

        entity = dict(options)
        entity.update(batch)

        if attached_files is not None:
            entity["attached_files"] = attached_files

        return entity

    def __iter__(self) -> Iterator[BatchRequestEntry]:
        return iter(self.requests)

    def __len__(self) -> int:
        return len(self.requests)

    def __getitem__(self, index: int) -> BatchRequestEntry:
        return self.requests[index]


class BatchResponse(GraphResponse):
    """The batch POST response split into one GraphResponse per child.

    Children are keyed by their batch name, or by position when unnamed.
    Error children are not raised; check `is_error()` on each.
    """

    def __init__(self, batch_request: BatchRequest, response: GraphResponse):
        self.batch_request = batch_request
        self.responses: Dict[Any, GraphResponse] = {}
        super().__init__(response.request, response.body, response.http_status_code, response.headers)

        if isinstance(self.decoded_body, list):
            for index, item in enumerate(self.decoded_body):
                self.add_response(index, item)

    def add_response(self, index: int, response: Optional[Dict[str, Any]] = None) -> None:
        entry = self.batch_request[index] if index < len(self.batch_request) else None
        name = entry.name if entry is not None and entry.name is not None else index
        original_request = entry.request if entry is not None else None

        response = response or {}
        self.responses[name] = GraphResponse(
            original_request,
            response.get("body"),
            response.get("code"),
            self.normalize_batch_headers(response.get("headers") or []),
        )

    @staticmethod
    def normalize_batch_headers(batch_headers: List[Dict[str, str]]) -> Dict[str, str]:
        return {h["name"]: h["value"] for h in batch_headers if "name" in h}

    def __getitem__(self, key: Any) -> GraphResponse:
        return self.responses[key]

    def __contains__(self, key: Any) -> bool:
        return key in self.responses

    def __iter__(self) -> Iterator[Any]:
        return iter(self.responses)

    def __len__(self) -> int:
        return len(self.responses)

    def items(self):
        return self.responses.items()
