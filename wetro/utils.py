"""Helpers shared by the client: JSON schemas, identifiers, error text and validation."""

from __future__ import annotations

import json
import secrets
from collections.abc import Mapping
from typing import Any

UNKNOWN_ERROR = "Unknown error"


class ValidationError(Exception):
    """Raised when a request fails client-side validation.

    ``fields`` maps each offending field name to its first error message.
    """

    def __init__(self, message: str, fields: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields: dict[str, str] = dict(fields or {})

    def __str__(self) -> str:
        return self.message


class Validator:
    """Collects per-field validation errors, keeping the first message for each field."""

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def valid(self) -> bool:
        """Return True when no errors have been recorded."""
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        """Record ``message`` for ``key`` unless an error is already recorded for it."""
        self.errors.setdefault(key, message)

    def check(self, ok: bool, key: str, message: str) -> None:
        """Record ``message`` for ``key`` when ``ok`` is false."""
        if not ok:
            self.add_error(key, message)


def to_json_schema(schema: Any) -> str:
    """Serialise ``schema`` to compact JSON text with mapping keys sorted."""
    return json.dumps(schema, separators=(",", ":"), sort_keys=True)


def generate_id() -> str:
    """Return a random identifier in UUID layout (8-4-4-4-12 hex digits)."""
    raw = secrets.token_bytes(16).hex()
    return f"{raw[0:8]}-{raw[8:12]}-{raw[12:16]}-{raw[16:20]}-{raw[20:]}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_error(data: Any) -> str:
    """Build a readable message from an API error body.

    ``data`` is either raw JSON (``str`` or ``bytes``) or an already decoded
    object. A string ``error`` entry wins, then a string ``detail`` entry;
    otherwise every field is listed as ``field: messages``, joined by ``"; "``.
    """
    if isinstance(data, (bytes, bytearray, str)):
        try:
            data = json.loads(data)
        except ValueError:
            return UNKNOWN_ERROR
    if data is None:
        return ""
    if not isinstance(data, Mapping):
        return UNKNOWN_ERROR

    error = data.get("error")
    if isinstance(error, str):
        return error
    detail = data.get("detail")
    if isinstance(detail, str):
        return detail

    parts = []
    for field, messages in data.items():
        if isinstance(messages, list):
            text = ", ".join(_format_value(msg) for msg in messages)
        else:
            text = _format_value(messages)
        parts.append(f"{field}: {text}")
    return "; ".join(parts)