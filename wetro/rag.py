"""Collection management, querying and chat over collections."""

from __future__ import annotations

import os
from typing import Any

from .transport import APIClient
from .types import (
    ChatRequest,
    CollectionCreateResponse,
    DeleteCollectionResponse,
    GetCollectionResponse,
    ListCollectionResponse,
    QueryRequest,
    ResourceDeleteRequest,
    ResourceDeleteResponse,
    ResourceInsertRequest,
    ResourceInsertResponse,
    ResourceType,
    StandardResponse,
)


def _is_readable(resource: Any) -> bool:
    if isinstance(resource, (bytes, bytearray, memoryview)):
        return True
    return callable(getattr(resource, "read", None))


class RAGClient:
    """Creates, inspects and deletes collections, and queries or chats with them."""

    def __init__(self, api: APIClient) -> None:
        self.api = api

    def create_collection(self, collection_id: str) -> CollectionCreateResponse:
        """Create a collection with the given identifier."""
        data = self.api.request("POST", "/collection/create/", data={"collection_id": collection_id})
        return CollectionCreateResponse.from_dict(data or {})

    def get_collection(self, collection_id: str) -> GetCollectionResponse:
        """Fetch a single collection."""
        data = self.api.request("GET", f"/collection/get/{collection_id}/")
        return GetCollectionResponse.from_dict(data or {})

    def list_collections(self) -> ListCollectionResponse:
        """List all collections."""
        data = self.api.request("GET", "/collection/all/")
        return ListCollectionResponse.from_dict(data or {})

    def query_collection(self, request: QueryRequest) -> StandardResponse:
        """Query a collection; raises ValidationError before sending an invalid request."""
        request.validate()
        data = self.api.request("POST", "/collection/query/", data=request)
        return StandardResponse.from_dict(data or {})

    def chat_with_collection(self, request: ChatRequest) -> StandardResponse:
        """Send a chat message to a collection."""
        data = self.api.request("POST", "/collection/chat/", data=request)
        return StandardResponse.from_dict(data or {})

    def insert_resource(
        self,
        collection_id: str,
        resource: Any,
        resource_type: ResourceType | str,
    ) -> ResourceInsertResponse:
        """Insert a resource into a collection.

        A string that does not start with ``http`` (or any path object) names a
        local file, which is uploaded first; bytes and readable objects are
        uploaded under a random name; anything else is sent as its text form.
        """
        if isinstance(resource, os.PathLike) or (
            isinstance(resource, str) and not resource.startswith("http")
        ):
            resource_url = self.api.upload_file(collection_id, resource)
        elif _is_readable(resource):
            resource_url = self.api.upload_bytes(collection_id, resource)
        else:
            resource_url = str(resource)

        payload = ResourceInsertRequest(
            collection_id=collection_id,
            type=resource_type,
            resource=resource_url,
        )
        data = self.api.request("POST", "/resource/insert/", data=payload)
        return ResourceInsertResponse.from_dict(data or {})

    def remove_resource(self, request: ResourceDeleteRequest) -> ResourceDeleteResponse:
        """Remove a resource from a collection."""
        data = self.api.request("DELETE", "/resource/remove/", data=request)
        return ResourceDeleteResponse.from_dict(data or {})

    def delete_collection(self, collection_id: str) -> DeleteCollectionResponse:
        """Delete a collection."""
        data = self.api.request(
            "DELETE", "/collection/delete/", data={"collection_id": collection_id}
        )
        return DeleteCollectionResponse.from_dict(data or {})