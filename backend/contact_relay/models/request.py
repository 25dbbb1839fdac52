"""
Inbound request model for the contact handler.

The handler is invoked with a Lambda HTTP event (Function URL / HTTP API
payload v2.0). InboundRequest pulls out the few fields the handler needs so
the rest of the code never touches the raw event dict.

The request body is a tagged union:

  RawJsonText   — the body arrived as a string and still needs json.loads
  ParsedObject  — the body arrived already decoded into a dict

Any other shape (numbers, lists, None) is rejected by body_from_raw() with a
ParseError. Conversion is deferred until the handler's parse step so that
configuration problems are reported before body problems.
"""

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from contact_relay.errors import ParseError


@dataclass(frozen=True)
class RawJsonText:
    text: str


@dataclass(frozen=True)
class ParsedObject:
    data: dict


RequestBody = Union[RawJsonText, ParsedObject]


@dataclass(frozen=True)
class InboundRequest:
    """The parts of an HTTP event the handler reads."""
    method: str
    headers: dict = field(default_factory=dict)
    origin: Optional[str] = None
    raw_body: Any = None
    is_base64_encoded: bool = False

    @property
    def is_preflight(self) -> bool:
        return self.method == "OPTIONS"

    @classmethod
    def from_event(cls, event: Any) -> "InboundRequest":
        """
        Build an InboundRequest from a Lambda HTTP event.

        Reads requestContext.http.method (payload v2.0) and falls back to the
        top-level httpMethod used by REST API (payload v1.0) events. Missing
        sections are treated as empty rather than raising, so a malformed
        event still reaches the handler's error path.
        """
        if not isinstance(event, Mapping):
            event = {}

        headers = event.get("headers") or {}
        if not isinstance(headers, Mapping):
            headers = {}

        method = None
        request_context = event.get("requestContext")
        if isinstance(request_context, Mapping):
            http = request_context.get("http")
            if isinstance(http, Mapping):
                method = http.get("method")
        method = method or event.get("httpMethod") or ""

        return cls(
            method=str(method).upper(),
            headers=dict(headers),
            origin=headers.get("origin") or headers.get("Origin"),
            raw_body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded")),
        )


def body_from_raw(raw_body: Any, is_base64_encoded: bool = False) -> RequestBody:
    """
    Classify a raw event body into one of the RequestBody variants.

    Strings flagged isBase64Encoded are decoded as UTF-8 first.

    Raises:
        ParseError: the body is neither a string nor a dict, or base64
                    decoding fails.
    """
    if isinstance(raw_body, str):
        if is_base64_encoded:
            try:
                raw_body = base64.b64decode(raw_body, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as exc:
                raise ParseError(f"Failed to decode base64 event body: {exc}") from exc
        return RawJsonText(raw_body)
    if isinstance(raw_body, Mapping):
        return ParsedObject(dict(raw_body))
    raise ParseError("Invalid event body")
