"""The entry point bundling collection and tool operations."""

from __future__ import annotations

from typing import Any

import httpx

from .rag import RAGClient
from .tools import ToolsClient
from .transport import DEFAULT_API_VERSION, DEFAULT_BASE_URL, APIClient


class Client:
    """Gives access to the API's collection (``rag``) and tool (``tools``) operations."""

    def __init__(
        self,
        api_key: str,
        *,
        http_client: httpx.Client | None = None,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.api = APIClient(
            api_key,
            base_url=base_url,
            api_version=api_version,
            http_client=http_client,
        )
        self.rag = RAGClient(self.api)
        self.tools = ToolsClient(self.api)

    def close(self) -> None:
        """Release the HTTP client if this object created it."""
        self.api.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()