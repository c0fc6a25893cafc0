"""
Resumable Upload — Chunked video upload in three phases.

    POST /{target}/videos  upload_phase=start     file_size=N
        -> {"upload_session_id", "video_id", "start_offset", "end_offset"}
    POST /{target}/videos  upload_phase=transfer  start_offset, video_file_chunk
        -> {"start_offset", "end_offset"}   (repeat until start == end)
    POST /{target}/videos  upload_phase=finish    + metadata
        -> {"success": true}

When Graph rejects a chunk with a resumable error, transfer() hands back a
chunk to retry: the offsets Graph asked for when it names them, otherwise
the very same chunk object.
"""

from typing import Any, Dict, Optional, Union

from .access_token import AccessToken
from .app import FacebookApp
from .client import GraphClient
from .exceptions import ResponseException, ResumableUploadException
from .files import GraphFile, GraphVideo
from .request import GraphRequest


class TransferChunk:
    """One byte range of a video upload session."""

    def __init__(
        self,
        file: GraphFile,
        upload_session_id: Any,
        video_id: Any,
        start_offset: int,
        end_offset: int,
    ):
        self.file = file
        self.upload_session_id = upload_session_id
        self.video_id = video_id
        self.start_offset = int(start_offset)
        self.end_offset = int(end_offset)

    def partial_file(self) -> GraphVideo:
        """The bytes [start_offset, end_offset) of the file."""
        max_length = self.end_offset - self.start_offset
        return self.file.part(max_length, self.start_offset, GraphVideo)

    def is_last_chunk(self) -> bool:
        return self.start_offset == self.end_offset

    def __repr__(self) -> str:
        return (
            f"TransferChunk(session={self.upload_session_id!r}, "
            f"start={self.start_offset}, end={self.end_offset})"
        )


class ResumableUploader:
    """Runs the start/transfer/finish phases against one upload endpoint."""

    def __init__(
        self,
        app: FacebookApp,
        client: GraphClient,
        access_token: Union[AccessToken, str, None],
        graph_version: Optional[str],
        debug: bool = False,
    ):
        self.app = app
        self.client = client
        self.access_token = access_token
        self.graph_version = graph_version
        self.debug = debug

    def start(self, endpoint: str, file: GraphFile) -> TransferChunk:
        params = {
            "upload_phase": "start",
            "file_size": file.size,
        }
        response = self._send_upload_request(endpoint, params)

        if self.debug:
            print(f"  Upload session {response['upload_session_id']} started ({file.size} bytes)")

        return TransferChunk(
            file,
            response["upload_session_id"],
            response["video_id"],
            response["start_offset"],
            response["end_offset"],
        )

    def transfer(self, endpoint: str, chunk: TransferChunk, allow_to_throw: bool = False) -> TransferChunk:
        """Send one chunk and return the next one.

        Raises:
            ResponseException: For non-resumable errors, or any error when
                allow_to_throw is set.
        """
        params = {
            "upload_phase": "transfer",
            "upload_session_id": chunk.upload_session_id,
            "start_offset": chunk.start_offset,
            "video_file_chunk": chunk.partial_file(),
        }

        if self.debug:
            print(f"  Transferring bytes {chunk.start_offset}-{chunk.end_offset}")

        try:
            response = self._send_upload_request(endpoint, params)
        except ResponseException as e:
            previous = e.previous
            if allow_to_throw or not isinstance(previous, ResumableUploadException):
                raise

            if previous.start_offset is not None and previous.end_offset is not None:
                return TransferChunk(
                    chunk.file,
                    chunk.upload_session_id,
                    chunk.video_id,
                    previous.start_offset,
                    previous.end_offset,
                )

            # Same object back means "retry this chunk"
            return chunk

        return TransferChunk(
            chunk.file,
            chunk.upload_session_id,
            chunk.video_id,
            response["start_offset"],
            response["end_offset"],
        )

    def finish(self, endpoint: str, upload_session_id: Any, metadata: Optional[Dict[str, Any]] = None) -> bool:
        params = dict(metadata or {})
        params.update({
            "upload_phase": "finish",
            "upload_session_id": upload_session_id,
        })
        response = self._send_upload_request(endpoint, params)

        if self.debug:
            print(f"  Upload session {upload_session_id} finished")

        return bool(response.get("success"))

    def _send_upload_request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        request = GraphRequest(
            self.app, self.access_token, "POST", endpoint, params, None, self.graph_version
        )
        return self.client.send_request(request).decoded_body
