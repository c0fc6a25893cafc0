"""
Files — Local or remote files attached to a request as multipart uploads.

Passing a GraphFile as a param value moves it out of the regular params and
into the request's upload queue:

    fb.post("/me/photos", {"source": fb.file_to_upload("./cat.jpg")})

A GraphVideo is routed to the graph-video host with the longer video
timeout.
"""

import mimetypes
import os
import re
from typing import Optional, Type

import requests

from .exceptions import SDKException

REMOTE_FILE_PATTERN = re.compile(r"^(https?|ftp)://.*")
DEFAULT_MIMETYPE = "text/plain"


class GraphFile:
    """A file (or a byte range of it) to upload.

    Attributes:
        path: Local path or http(s)/ftp URL.
        max_length: Number of bytes to read, -1 for everything.
        offset: Byte offset to start reading at, -1 for the beginning.
    """

    def __init__(self, path: str, max_length: int = -1, offset: int = -1):
        self.path = str(path)
        self.max_length = max_length
        self.offset = offset
        self._remote_contents = None

        if not self.is_remote_file(self.path) and not os.access(self.path, os.R_OK):
            raise SDKException(
                f"Failed to create GraphFile entity. Unable to read resource: {self.path}."
            )

    @staticmethod
    def is_remote_file(path: str) -> bool:
        return REMOTE_FILE_PATTERN.match(path) is not None

    def _fetch_remote(self) -> bytes:
        if self._remote_contents is None:
            try:
                response = requests.get(self.path, timeout=60)
                response.raise_for_status()
            except requests.RequestException as e:
                raise SDKException(
                    f"Failed to create GraphFile entity. Unable to open resource: {self.path}."
                ) from e
            self._remote_contents = response.content
        return self._remote_contents

    def part(self, max_length: int, offset: int, file_class: Optional[Type["GraphFile"]] = None) -> "GraphFile":
        """A byte range of this file. Remote bytes are fetched once and shared."""
        part = (file_class or type(self))(self.path, max_length, offset)
        if self.is_remote_file(self.path):
            part._remote_contents = self._fetch_remote()
        return part

    @property
    def contents(self) -> bytes:
        """The bytes of the file within [offset, offset + max_length)."""
        if not self.is_remote_file(self.path):
            with open(self.path, "rb") as f:
                if self.offset > 0:
                    f.seek(self.offset)
                return f.read() if self.max_length < 0 else f.read(self.max_length)

        data = self._fetch_remote()
        start = max(self.offset, 0)
        if self.max_length < 0:
            return data[start:]
        return data[start:start + self.max_length]

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)

    @property
    def file_path(self) -> str:
        return self.path

    @property
    def size(self) -> int:
        if self.is_remote_file(self.path):
            return len(self._fetch_remote())
        return os.path.getsize(self.path)

    @property
    def mimetype(self) -> str:
        mimetype, _ = mimetypes.guess_type(self.path)
        return mimetype or DEFAULT_MIMETYPE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class GraphVideo(GraphFile):
    """A video file; requests carrying one go to the graph-video host."""
