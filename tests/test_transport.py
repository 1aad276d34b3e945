import io
import json

import httpx
import pytest

from wetro.transport import REFERRER, UPLOAD_URL, APIClient
from wetro.types import APIError, ImageToTextRequest


def make_client(handler, **kwargs):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return APIClient("placeholder", base_url="http://testserver/", http_client=http_client, **kwargs)


class Recorder:
    def __init__(self, status=200, body=b'{"success": true}'):
        self.status = status
        self.body = body
        self.requests = []

    def __call__(self, request):
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status, content=self.body)


def test_request_builds_url_headers_and_query():
    recorder = Recorder()
    client = make_client(recorder)
    result = client.request("GET", "/collection/all/", {"page": "2"})
    assert result == {"success": True}
    sent = recorder.requests[0]
    assert sent.url.path == "/v1/collection/all/"
    assert sent.url.params["referrer"] == REFERRER
    assert sent.url.params["page"] == "2"
    assert sent.headers["Authorization"] == "Token placeholder"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.content == b""


def test_request_does_not_mutate_params():
    recorder = Recorder()
    client = make_client(recorder)
    params = {"a": "b"}
    client.request("GET", "/x/", params)
    assert params == {"a": "b"}


def test_request_serialises_dataclass_payload():
    recorder = Recorder()
    client = make_client(recorder)
    payload = ImageToTextRequest(image_url="https://example.com/image.jpg", query="What is in this image?")
    client.request("POST", "/image-to-text/", None, payload)
    sent = json.loads(recorder.requests[0].content)
    assert sent == payload.to_dict()


def test_request_serialises_plain_mapping():
    recorder = Recorder()
    client = make_client(recorder)
    client.request("DELETE", "/collection/delete/", None, {"collection_id": "test-collection"})
    sent = recorder.requests[0]
    assert sent.method == "DELETE"
    assert json.loads(sent.content) == {"collection_id": "test-collection"}


def test_request_uses_custom_api_version():
    recorder = Recorder()
    client = make_client(recorder, api_version="v2")
    client.request("GET", "/collection/all/")
    assert recorder.requests[0].url.path == "/v2/collection/all/"


def test_error_uses_error_field_and_payload():
    body = json.dumps({"error": "bad request", "payload": {"x": 1}}).encode()
    client = make_client(Recorder(400, body))
    with pytest.raises(APIError) as info:
        client.request("GET", "/x/")
    assert info.value.message == "bad request"
    assert info.value.status_code == 400
    assert info.value.payload == {"x": 1}


def test_error_uses_detail_field():
    body = json.dumps({"detail": "forbidden"}).encode()
    client = make_client(Recorder(403, body))
    with pytest.raises(APIError) as info:
        client.request("GET", "/x/")
    assert str(info.value) == "forbidden"
    assert info.value.payload is None


def test_error_with_field_messages():
    body = json.dumps({"collection_id": ["required"]}).encode()
    client = make_client(Recorder(422, body))
    with pytest.raises(APIError) as info:
        client.request("GET", "/x/")
    assert info.value.message == "collection_id: required"


def test_error_with_unparseable_body():
    client = make_client(Recorder(404, b"Not found\n"))
    with pytest.raises(APIError) as info:
        client.request("GET", "/x/")
    assert info.value.message == "Failed to parse error response"
    assert info.value.status_code == 404


def test_multipart_request_encodes_fields():
    recorder = Recorder()
    client = make_client(recorder)
    result = client.multipart_request("POST", "/form/", {"name": "plain", "items": [1, 2]})
    assert result == {"success": True}
    sent = recorder.requests[0]
    assert sent.headers["Content-Type"].startswith("multipart/form-data")
    assert sent.headers["Authorization"] == "Token placeholder"
    assert b'name="name"' in sent.content
    assert b"plain" in sent.content
    assert b"[1, 2]" in sent.content
    assert "referrer" not in sent.url.params


def test_multipart_request_raises_on_error():
    body = json.dumps({"error": "nope"}).encode()
    client = make_client(Recorder(500, body))
    with pytest.raises(APIError) as info:
        client.multipart_request("POST", "/form/", {"a": "b"})
    assert info.value.message == "nope"


def test_upload_returns_url_and_sends_file():
    recorder = Recorder(200, json.dumps({"url": "https://example.com/f.txt"}).encode())
    client = make_client(recorder)
    url = client.upload(io.BytesIO(b"file-content"), "test-collection", "f.txt")
    assert url == "https://example.com/f.txt"
    sent = recorder.requests[0]
    assert str(sent.url) == UPLOAD_URL
    assert b'filename="f.txt"' in sent.content
    assert b"file-content" in sent.content
    assert b"test-collection" in sent.content


def test_upload_failure_status():
    client = make_client(Recorder(500, b"{}"))
    with pytest.raises(APIError) as info:
        client.upload(b"data", "c", "f.txt")
    assert info.value.message == "file upload failed"


def test_upload_without_url():
    client = make_client(Recorder(200, b"{}"))
    with pytest.raises(APIError) as info:
        client.upload(b"data", "c", "f.txt")
    assert info.value.message == "no URL in response"


def test_upload_file_uses_base_name(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello notes")
    recorder = Recorder(200, json.dumps({"url": "https://example.com/notes.txt"}).encode())
    client = make_client(recorder)
    assert client.upload_file("c", str(path)) == "https://example.com/notes.txt"
    assert b'filename="notes.txt"' in recorder.requests[0].content
    assert b"hello notes" in recorder.requests[0].content


def test_upload_file_missing(tmp_path):
    client = make_client(Recorder())
    missing = tmp_path / "absent.txt"
    with pytest.raises(FileNotFoundError, match="does not exist"):
        client.upload_file("c", str(missing))


def test_upload_bytes_uses_generated_name():
    recorder = Recorder(200, json.dumps({"url": "https://example.com/u"}).encode())
    client = make_client(recorder)
    assert client.upload_bytes("c", io.BytesIO(b"abc")) == "https://example.com/u"
    content = recorder.requests[0].content
    start = content.index(b'filename="') + len(b'filename="')
    name = content[start:content.index(b'"', start)].decode()
    assert [len(part) for part in name.split("-")] == [8, 4, 4, 4, 12]


def test_upload_bytes_rejects_unreadable():
    client = make_client(Recorder())
    with pytest.raises(TypeError, match="Invalid Resource"):
        client.upload_bytes("c", 12345)