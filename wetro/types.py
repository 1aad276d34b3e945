"""Request and response types exchanged with the API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .utils import ValidationError, Validator


class ChatModel(str, Enum):
    """Chat models supported by the API."""

    CHATGPT_4O_LATEST = "chatgpt-4o-latest"
    CLAUDE_3_5_HAIKU_20241022 = "claude-3-5-haiku-20241022"
    CLAUDE_3_5_SONNET_20240620 = "claude-3-5-sonnet-20240620"
    CLAUDE_3_5_SONNET_20241022 = "claude-3-5-sonnet-20241022"
    CLAUDE_3_7_SONNET_20250219 = "claude-3-7-sonnet-20250219"
    CLAUDE_3_HAIKU_20240307 = "claude-3-haiku-20240307"
    CLAUDE_3_OPUS_20240229 = "claude-3-opus-20240229"
    CLAUDE_3_SONNET_20240229 = "claude-3-sonnet-20240229"
    DEEPSEEK_R1_DISTILL_LLAMA_70B = "deepseek-r1-distill-llama-70b"
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4_TURBO_PREVIEW = "gpt-4-turbo-preview"
    GPT_4_5_PREVIEW = "gpt-4.5-preview"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    LLAMA_3_1_8B = "llama-3.1-8b"
    LLAMA_3_1_8B_INSTANT = "llama-3.1-8b-instant"
    LLAMA_3_2_1B_PREVIEW = "llama-3.2-1b-preview"
    LLAMA_3_2_3B_PREVIEW = "llama-3.2-3b-preview"
    LLAMA_3_2_11B_VISION_PREVIEW = "llama-3.2-11b-vision-preview"
    LLAMA_3_2_90B_VISION_PREVIEW = "llama-3.2-90b-vision-preview"
    LLAMA_3_3_70B = "llama-3.3-70b"
    LLAMA_3_3_70B_SPECDEC = "llama-3.3-70b-specdec"
    LLAMA_3_3_70B_VERSATILE = "llama-3.3-70b-versatile"
    LLAMA3_70B_8192 = "llama3-70b-8192"
    LLAMA3_8B_8192 = "llama3-8b-8192"
    LLAMA_GUARD_3_8B = "llama-guard-3-8b"
    MIXTRAL_8X7B_32768 = "mixtral-8x7b-32768"
    O1 = "o1"
    O1_MINI = "o1-mini"
    O1_PREVIEW = "o1-preview"
    O3_MINI = "o3-mini"
    QWEN_2_5_32B = "qwen-2.5-32b"
    QWEN_2_5_CODER_32B = "qwen-2.5-coder-32b"


class ResourceType(str, Enum):
    """Kinds of resource the API can process."""

    TEXT = "text"
    WEB = "web"
    FILE = "file"
    JSON = "json"
    YOUTUBE = "youtube"


class APIError(Exception):
    """An error reported by the API, with its HTTP status and optional payload."""

    def __init__(self, message: str, status_code: int, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        return self.message


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _present(value: Any) -> bool:
    return value is not None and not (isinstance(value, (str, bytes)) and len(value) == 0)


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    return bool(data.get(key) or False)


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    return 0 if value is None else int(value)


def _raise_if_invalid(validator: Validator) -> None:
    if not validator.valid():
        raise ValidationError("Validation Error", validator.errors)


@dataclass
class StandardResponse:
    """The common response shape: success flag, token usage and the payload."""

    success: bool = False
    tokens: int = 0
    response: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StandardResponse:
        return cls(
            success=_bool(data, "success"),
            tokens=_int(data, "tokens"),
            response=data.get("response"),
        )


@dataclass
class CollectionCreateResponse:
    success: bool = False
    collection_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CollectionCreateResponse:
        return cls(success=_bool(data, "success"), collection_id=_str(data, "collection_id"))


@dataclass
class CollectionItem:
    """A collection's identifier and creation timestamp."""

    collection_id: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CollectionItem:
        return cls(collection_id=_str(data, "collection_id"), created_at=_str(data, "created_at"))


@dataclass
class GetCollectionResponse:
    success: bool = False
    found: bool = False
    collection_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GetCollectionResponse:
        return cls(
            success=_bool(data, "success"),
            found=_bool(data, "found"),
            collection_id=_str(data, "collection_id"),
        )


@dataclass
class ListCollectionResponse:
    """One page of collections with pagination links."""

    count: int = 0
    next: str = ""
    previous: str = ""
    results: list[CollectionItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ListCollectionResponse:
        return cls(
            count=_int(data, "count"),
            next=_str(data, "next"),
            previous=_str(data, "previous"),
            results=[CollectionItem.from_dict(item) for item in data.get("results") or []],
        )


@dataclass
class ResourceInsertRequest:
    collection_id: str
    type: ResourceType | str
    resource: str

    def validate(self) -> None:
        """Raise ValidationError when the collection id or type is empty."""
        validator = Validator()
        validator.check(self.collection_id != "", "collection_id", "collection_id should not be empty")
        validator.check(_plain(self.type) != "", "type", "resource type should not be empty")
        _raise_if_invalid(validator)

    def to_dict(self) -> dict[str, Any]:
        return {
            "collection_id": self.collection_id,
            "type": _plain(self.type),
            "resource": self.resource,
        }


@dataclass
class ResourceInsertResponse:
    resource_id: str = ""
    success: bool = False
    tokens: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceInsertResponse:
        return cls(
            resource_id=_str(data, "resource_id"),
            success=_bool(data, "success"),
            tokens=_int(data, "tokens"),
        )


@dataclass
class ResourceDeleteRequest:
    collection_id: str
    resource_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"collection_id": self.collection_id, "resource_id": self.resource_id}


@dataclass
class ResourceDeleteResponse:
    success: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceDeleteResponse:
        return cls(success=_bool(data, "success"))


@dataclass
class QueryRequest:
    """A query against a collection; ``json_schema`` requires ``json_schema_rules``."""

    collection_id: str
    query: str
    model: ChatModel | str | None = None
    json_schema: Any = None
    json_schema_rules: Any = None
    stream: bool = False

    def validate(self) -> None:
        """Raise ValidationError when the request is incomplete."""
        validator = Validator()
        validator.check(self.collection_id != "", "collection_id", "collection_id should not be empty")
        if _present(self.json_schema):
            validator.check(
                _present(self.json_schema_rules),
                "json_schema_rules",
                "must have json_schema_rules if json_schema is used",
            )
        _raise_if_invalid(validator)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "collection_id": self.collection_id,
            "request_query": self.query,
        }
        if self.model:
            body["model"] = _plain(self.model)
        if _present(self.json_schema):
            body["json_schema"] = self.json_schema
        if _present(self.json_schema_rules):
            body["json_schema_rules"] = self.json_schema_rules
        body["stream"] = self.stream
        return body


@dataclass
class ChatRequest:
    """A chat message to a collection, with optional conversation history."""

    collection_id: str
    message: str
    chat_history: list[dict[str, str]] | None = None
    stream: bool = False

    def to_dict(self) -> dict[str, Any]:
        history = None if self.chat_history is None else [dict(m) for m in self.chat_history]
        return {
            "collection_id": self.collection_id,
            "message": self.message,
            "chat_history": history,
            "stream": self.stream,
        }


@dataclass
class DeleteCollectionResponse:
    message: str = ""
    success: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DeleteCollectionResponse:
        return cls(message=_str(data, "message"), success=_bool(data, "success"))


@dataclass
class CategorizeRequest:
    type: ResourceType | str
    resource: str
    json_schema: Any = None
    categories: list[str] | None = None
    prompt: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": _plain(self.type),
            "resource": self.resource,
            "json_schema": self.json_schema,
            "categories": None if self.categories is None else list(self.categories),
            "prompt": self.prompt,
        }


@dataclass
class MessageObject:
    """One chat message: the sender's role and the content."""

    role: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class TextGenerationRequest:
    messages: list[MessageObject] | None = None
    model: ChatModel | str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "messages": None if self.messages is None else [m.to_dict() for m in self.messages],
        }
        if self.model:
            body["model"] = _plain(self.model)
        return body


@dataclass
class ImageToTextRequest:
    image_url: str
    query: str

    def to_dict(self) -> dict[str, Any]:
        return {"image_url": self.image_url, "request_query": self.query}


@dataclass
class DataExtractionRequest:
    web_url: str
    schema: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"website": self.web_url, "json_schema": self.schema}