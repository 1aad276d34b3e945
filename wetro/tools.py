"""AI tools: categorisation, text generation, image description and data extraction."""

from __future__ import annotations

from .transport import APIClient
from .types import (
    CategorizeRequest,
    DataExtractionRequest,
    ImageToTextRequest,
    StandardResponse,
    TextGenerationRequest,
)


class ToolsClient:
    """Calls the API's stand-alone AI tools."""

    def __init__(self, api: APIClient) -> None:
        self.api = api

    def _post(self, endpoint: str, payload: object) -> StandardResponse:
        data = self.api.request("POST", endpoint, data=payload)
        return StandardResponse.from_dict(data or {})

    def categorize_data(self, payload: CategorizeRequest) -> StandardResponse:
        """Categorise a resource into one of the given categories."""
        return self._post("/categorize/", payload)

    def generate_text(self, payload: TextGenerationRequest) -> StandardResponse:
        """Generate text from a conversation."""
        return self._post("/text-generation/", payload)

    def image_to_text(self, payload: ImageToTextRequest) -> StandardResponse:
        """Answer a question about an image."""
        return self._post("/image-to-text/", payload)

    def extract_data(self, payload: DataExtractionRequest) -> StandardResponse:
        """Extract structured data from a website."""
        return self._post("/data-extraction/", payload)