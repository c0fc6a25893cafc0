"""Tests for facebook_graph_sdk.resumable_upload."""

from unittest.mock import MagicMock, patch

import pytest

from conftest import graph_error, raw_response
from facebook_graph_sdk.exceptions import ResponseException, ResumableUploadException
from facebook_graph_sdk.files import GraphFile, GraphVideo
from facebook_graph_sdk.resumable_upload import ResumableUploader, TransferChunk

ENDPOINT = "/me/videos"


@pytest.fixture
def uploader(app, client):
    return ResumableUploader(app, client, "foo_token", "v15.0")


@pytest.fixture
def video(upload_file):
    return GraphVideo(str(upload_file))


@pytest.fixture
def chunk(video):
    return TransferChunk(video, "42", "1337", 0, 20)


def test_chunk_offsets_are_ints(video):
    chunk = TransferChunk(video, "42", "1337", "20", "50")
    assert chunk.start_offset == 20
    assert chunk.end_offset == 50
    assert chunk.is_last_chunk() is False
    assert TransferChunk(video, "42", "1337", 50, 50).is_last_chunk() is True


def test_partial_file(chunk):
    partial = chunk.partial_file()
    assert isinstance(partial, GraphVideo)
    assert partial.contents == b"This is a text file "


def test_start(uploader, video, http_client):
    http_client.send.return_value = raw_response(
        {"upload_session_id": "42", "video_id": "1337", "start_offset": "0", "end_offset": "20"}
    )

    chunk = uploader.start(ENDPOINT, video)

    assert chunk.upload_session_id == "42"
    assert chunk.video_id == "1337"
    assert (chunk.start_offset, chunk.end_offset) == (0, 20)
    assert chunk.file is video

    url, method, body = http_client.send.call_args[0][:3]
    assert method == "POST"
    assert url == "https://graph.facebook.com/v15.0/me/videos"
    assert "upload_phase=start" in body
    assert "file_size=50" in body


def test_transfer_returns_next_chunk(uploader, chunk, http_client):
    http_client.send.return_value = raw_response({"start_offset": "20", "end_offset": "50"})

    next_chunk = uploader.transfer(ENDPOINT, chunk)

    assert (next_chunk.start_offset, next_chunk.end_offset) == (20, 50)
    assert next_chunk.upload_session_id == "42"

    url, method, body, headers, timeout = http_client.send.call_args[0]
    assert url.startswith("https://graph-video.facebook.com/v15.0/me/videos")
    assert headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b"This is a text file " in body
    assert timeout == 7200


def test_resumable_error_retries_same_chunk(uploader, chunk, http_client):
    http_client.send.return_value = raw_response(graph_error(6000, subcode=1363019), status=500)

    assert uploader.transfer(ENDPOINT, chunk) is chunk


def test_resumable_error_with_new_offsets(uploader, chunk, http_client):
    http_client.send.return_value = raw_response(
        graph_error(6000, subcode=1363037, error_data={"start_offset": 10, "end_offset": 30}),
        status=500,
    )

    retry = uploader.transfer(ENDPOINT, chunk)

    assert retry is not chunk
    assert (retry.start_offset, retry.end_offset) == (10, 30)
    assert retry.video_id == "1337"


def test_resumable_error_raises_when_allowed(uploader, chunk, http_client):
    http_client.send.return_value = raw_response(graph_error(6000, subcode=1363019), status=500)

    with pytest.raises(ResponseException) as exc_info:
        uploader.transfer(ENDPOINT, chunk, allow_to_throw=True)
    assert isinstance(exc_info.value.previous, ResumableUploadException)


def test_other_errors_are_raised(uploader, chunk, http_client):
    http_client.send.return_value = raw_response(graph_error(190), status=400)

    with pytest.raises(ResponseException):
        uploader.transfer(ENDPOINT, chunk)


def test_finish(uploader, http_client):
    http_client.send.return_value = raw_response({"success": True})

    assert uploader.finish(ENDPOINT, "42", {"title": "My video"}) is True

    body = http_client.send.call_args[0][2]
    assert "title=My+video" in body
    assert "upload_phase=finish" in body
    assert "upload_session_id=42" in body


def test_finish_without_success(uploader, http_client):
    http_client.send.return_value = raw_response({})
    assert uploader.finish(ENDPOINT, "42") is False


def test_debug_output(app, client, upload_file, http_client, capsys):
    uploader = ResumableUploader(app, client, "foo_token", "v15.0", debug=True)
    http_client.send.return_value = raw_response(
        {"upload_session_id": "42", "video_id": "1337", "start_offset": 0, "end_offset": 50}
    )

    uploader.start(ENDPOINT, GraphFile(str(upload_file)))

    out = capsys.readouterr().out
    assert "Upload session 42 started (50 bytes)" in out
    assert "foo_token" not in out


@patch("facebook_graph_sdk.files.requests.get")
def test_remote_video_is_downloaded_once(mock_get, uploader, http_client):
    mock_get.return_value = MagicMock(content=b"0123456789")
    video = GraphVideo("https://foo.bar/clip.mp4")
    http_client.send.side_effect = [
        raw_response({"upload_session_id": "42", "video_id": "1337", "start_offset": 0, "end_offset": 5}),
        raw_response({"start_offset": 5, "end_offset": 10}),
        raw_response({"start_offset": 10, "end_offset": 10}),
    ]

    chunk = uploader.start(ENDPOINT, video)
    chunk = uploader.transfer(ENDPOINT, chunk)
    assert chunk.partial_file().contents == b"56789"
    chunk = uploader.transfer(ENDPOINT, chunk)

    assert chunk.is_last_chunk() is True
    assert b"01234" in http_client.send.call_args_list[1][0][2]
    assert b"56789" in http_client.send.call_args_list[2][0][2]
    mock_get.assert_called_once()
