# wetro

A Python client for the WetroCloud API, built on `httpx`. It covers two areas:

- **RAG** (`client.rag`, a `wetro.rag.RAGClient`): create, fetch, list and
  delete collections, insert and remove resources, query a collection and
  chat with it.
- **Tools** (`client.tools`, a `wetro.tools.ToolsClient`): categorize data,
  generate text, describe images and extract structured data from websites.

## Installation

```
pip install wetro
```

To run the test suite:

```
pip install "wetro[test]"
pytest
```

## Quick start

```python
from wetro.client import Client
from wetro.types import QueryRequest, ResourceType

with Client("placeholder") as client:
    created = client.rag.create_collection("my-collection")
    print(created.success, created.collection_id)

    inserted = client.rag.insert_resource(
        "my-collection", "https://example.com/article", ResourceType.WEB
    )
    print(inserted.resource_id, inserted.tokens)

    answer = client.rag.query_collection(
        QueryRequest(collection_id="my-collection", query="What is this about?")
    )
    print(answer.response)
```

`Client(api_key, *, http_client=None, api_version="v1", base_url=...)` accepts
an existing `httpx.Client`; a client it creates itself is closed by
`Client.close()` or on leaving the `with` block. Every request carries the
header `Authorization: Token <api_key>`.

### Inserting resources

`insert_resource(collection_id, resource, resource_type)` decides what to
send from the kind of `resource`:

- a string that does not start with `http`, or any path object, is taken as a
  local file, uploaded first under its base name, and the returned URL is
  inserted;
- `bytes`, `bytearray`, `memoryview` or any object with a `read()` method is
  uploaded under a random name, and the returned URL is inserted;
- anything else is inserted as its text form.

A missing file raises `FileNotFoundError`.

### Other collection calls

- `get_collection(collection_id)` → `GetCollectionResponse`
- `list_collections()` → `ListCollectionResponse` (`count`, `next`,
  `previous`, `results` of `CollectionItem`)
- `chat_with_collection(ChatRequest(...))` → `StandardResponse`
- `remove_resource(ResourceDeleteRequest(...))` → `ResourceDeleteResponse`
- `delete_collection(collection_id)` → `DeleteCollectionResponse`

## Tools

```python
from wetro.client import Client
from wetro.types import ChatModel, MessageObject, TextGenerationRequest

client = Client("placeholder")

result = client.tools.generate_text(
    TextGenerationRequest(
        messages=[MessageObject(role="user", content="Write a haiku")],
        model=ChatModel.GPT_3_5_TURBO,
    )
)
print(result.tokens, result.response)
```

`categorize_data`, `image_to_text` and `extract_data` work the same way with
`CategorizeRequest`, `ImageToTextRequest` and `DataExtractionRequest`, and
all return a `StandardResponse` (`success`, `tokens`, `response`).

## Errors

- `wetro.types.APIError` is raised when the API answers with a status of 400
  or above. It carries `message`, `status_code` and any `payload` the server
  sent. The message is the body's `error` or `detail` text, or else a list of
  `field: messages` entries.
- `wetro.utils.ValidationError` is raised by `query_collection` before any
  request is sent when the request has an empty collection id, or a JSON
  schema without schema rules. Its `fields` map each field to its problem.

## Helpers

- `wetro.utils.generate_id()` returns a random identifier in UUID layout,
  handy for naming collections.
- `wetro.utils.to_json_schema(schema)` serialises a schema to compact JSON
  text with keys sorted.

## Limits

Setting `stream=True` on a `QueryRequest` or `ChatRequest` only passes the
flag to the API; the client reads each answer as one whole JSON document and
does not deliver streamed output piece by piece. The package is a library
only and installs no command.