"""Low-level HTTP transport: authenticated JSON and multipart calls and file uploads."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

import httpx

from .types import APIError
from .utils import generate_id, parse_error

DEFAULT_BASE_URL = "https://api.wetrocloud.com/"
DEFAULT_API_VERSION = "v1"
UPLOAD_URL = "https://file-upload-service-python.vercel.app/upload/"
REFERRER = "PYTHON_SDK"


def _serialisable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    return to_dict() if callable(to_dict) else data


def _decode_json(response: httpx.Response) -> Any:
    return json.loads(response.content)


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    try:
        body = _decode_json(response)
    except ValueError:
        body = None
    if body is not None and not isinstance(body, Mapping):
        body = ...
    if body is None and response.content.strip() != b"null":
        raise APIError("Failed to parse error response", response.status_code)
    if body is ...:
        raise APIError("Failed to parse error response", response.status_code)
    payload = body.get("payload") if isinstance(body, Mapping) else None
    raise APIError(parse_error(body), response.status_code, payload)


def _read_resource(resource: Any) -> bytes:
    if isinstance(resource, (bytes, bytearray, memoryview)):
        return bytes(resource)
    read = getattr(resource, "read", None)
    if not callable(read):
        raise TypeError("Invalid Resource")
    content = read()
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


class APIClient:
    """Sends authenticated requests to the API and uploads files for it."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        http_client: httpx.Client | None = None,
        upload_url: str = UPLOAD_URL,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.api_version = api_version
        self.upload_url = upload_url
        self._owns_client = http_client is None
        self.http_client = http_client if http_client is not None else httpx.Client(timeout=None)

    def close(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> APIClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{self.api_version}{endpoint}"

    @property
    def _auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Token {self.api_key}"}

    def request(
        self,
        method: str,
        endpoint: str,
        params: Mapping[str, str] | None = None,
        data: Any = None,
    ) -> Any:
        """Send a JSON request and return the decoded JSON response.

        Raises APIError for any status of 400 or above.
        """
        query = dict(params or {})
        query["referrer"] = REFERRER
        content = None
        if data is not None:
            content = json.dumps(_serialisable(data)).encode("utf-8")
        headers = {**self._auth_header, "Content-Type": "application/json"}
        response = self.http_client.request(
            method, self._url(endpoint), params=query, content=content, headers=headers
        )
        _raise_for_status(response)
        return _decode_json(response)

    def multipart_request(self, method: str, endpoint: str, data: Mapping[str, Any]) -> Any:
        """Send ``data`` as multipart form fields and return the decoded JSON response.

        String values are sent as they are; other values are sent as JSON text.
        """
        fields = {
            key: (None, value if isinstance(value, str) else json.dumps(_serialisable(value)))
            for key, value in data.items()
        }
        response = self.http_client.request(
            method, self._url(endpoint), files=fields, headers=self._auth_header
        )
        _raise_for_status(response)
        return _decode_json(response)

    def upload_bytes(self, collection_id: str, resource: Any) -> str:
        """Upload in-memory content or a readable object under a random name."""
        content = _read_resource(resource)
        return self.upload(content, collection_id, generate_id())

    def upload_file(self, collection_id: str, file_path: str | os.PathLike[str]) -> str:
        """Upload the file at ``file_path`` under its base name."""
        path = os.fspath(file_path)
        try:
            with open(path, "rb") as handle:
                content = handle.read()
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"File {path} does not exist") from exc
        return self.upload(content, collection_id, os.path.basename(path))

    def upload(self, reader: Any, collection_id: str, filename: str) -> str:
        """Upload content to the file service and return the URL it reports."""
        content = _read_resource(reader)
        response = self.http_client.post(
            self.upload_url,
            files={
                "collection_id": (None, collection_id),
                "file": (filename, content, "application/octet-stream"),
            },
        )
        if response.status_code >= 400:
            raise APIError("file upload failed", response.status_code)
        result = _decode_json(response)
        if not isinstance(result, Mapping):
            raise ValueError("unexpected upload response")
        url = result.get("url")
        if url is None:
            raise APIError("no URL in response", response.status_code)
        if not isinstance(url, str):
            raise ValueError("unexpected upload response")
        return url