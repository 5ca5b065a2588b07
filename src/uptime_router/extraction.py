"""Tolerant parsing of Upptime alert payloads.

Upptime posts whatever its notification template renders, so the body may be a
JSON string, an object with ``message`` or ``data.message``, anything else, or
not JSON at all. Every function here is total: malformed input degrades to a
default instead of raising.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Union

UNKNOWN_SITE = "Unknown Site"

# "🟥 Site Name (https://example.com) is **down** : ..."
_URL_RE = re.compile(r"\((?P<url>https?://[^)]+)\)")
_JSON_SITE_RE = re.compile(r'"site(?:Name)?"\s*:\s*"(?P<name>[^"]+)"', re.IGNORECASE)
_LEADING_NAME_RE = re.compile(r"^\s*(?:[^\w\s(]+\s*)?(?P<name>[^(]+?)\s*\(")
_EDGE_QUOTES_RE = re.compile(r"^[\"']|[\"']\Z")


@dataclass(frozen=True)
class TextPayload:
    text: str


@dataclass(frozen=True)
class NestedMessagePayload:
    message: str


@dataclass(frozen=True)
class MessagePayload:
    message: str


@dataclass(frozen=True)
class OtherPayload:
    value: Any


AlertPayload = Union[TextPayload, NestedMessagePayload, MessagePayload, OtherPayload]


def parse_body(body: bytes | str) -> Any:
    """Decode a request body as JSON, falling back to an empty object."""
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return {}
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return {}


def classify_payload(raw: Any) -> AlertPayload:
    """Resolve a decoded payload into one of the known shapes.

    Precedence: bare string, ``data.message``, ``message``, anything else.
    """
    if isinstance(raw, str):
        return TextPayload(raw)
    if isinstance(raw, dict):
        data = raw.get("data")
        if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"]:
            return NestedMessagePayload(data["message"])
        if isinstance(raw.get("message"), str) and raw["message"]:
            return MessagePayload(raw["message"])
    return OtherPayload(raw)


def payload_text(payload: AlertPayload) -> str:
    if isinstance(payload, TextPayload):
        return payload.text
    if isinstance(payload, (NestedMessagePayload, MessagePayload)):
        return payload.message
    try:
        return json.dumps(payload.value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError):
        return str(payload.value)


def extract_message(raw: Any) -> str:
    """Human-readable alert text with one leading/trailing quote stripped."""
    return _EDGE_QUOTES_RE.sub("", payload_text(classify_payload(raw)))


def extract_url(message: str) -> str | None:
    """First parenthesized http(s) URL in the message, if any."""
    match = _URL_RE.search(message or "")
    return match.group("url") if match else None


def extract_site_name(message: str) -> str:
    """Site name from a JSON-style field or the text before the first ``(``."""
    text = message or ""
    json_match = _JSON_SITE_RE.search(text)
    if json_match:
        return json_match.group("name")

    message_match = _LEADING_NAME_RE.match(text)
    if message_match:
        name = message_match.group("name").strip()
        if name:
            return name
    return UNKNOWN_SITE
