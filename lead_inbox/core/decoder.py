"""
Decode raw Gmail API message resources into InboundMessage objects.

Decoding never raises: anything missing or malformed becomes an empty
string so a single bad message cannot abort a polling cycle.
"""

import base64
import binascii
from typing import Any

from lead_inbox.core.models import InboundMessage


def decode_message(raw: dict[str, Any]) -> InboundMessage:
    """
    Build an InboundMessage from a `users.messages.get(format="full")` resource.

    Args:
        raw: Message resource as returned by the Gmail API

    Returns:
        InboundMessage with subject/from/to headers and the plain-text body
    """
    raw = raw if isinstance(raw, dict) else {}
    payload = _as_dict(raw.get("payload"))
    headers = payload.get("headers")

    return InboundMessage(
        id=str(raw.get("id") or ""),
        thread_id=str(raw.get("threadId") or ""),
        subject=header_value(headers, "Subject"),
        sender=header_value(headers, "From"),
        recipient=header_value(headers, "To"),
        body=extract_body(payload),
    )


def header_value(headers: Any, name: str) -> str:
    """Value of the first header named exactly `name` (case-sensitive), or ""."""
    if not isinstance(headers, list):
        return ""
    for header in headers:
        if isinstance(header, dict) and header.get("name") == name:
            return str(header.get("value") or "")
    return ""


def extract_body(payload: dict[str, Any]) -> str:
    """
    Pick the message body text.

    Order: inline top-level body, then the first direct "text/plain" part,
    otherwise "". No HTML fallback and no recursion into nested parts.
    """
    data = _as_dict(payload.get("body")).get("data")
    if data:
        return decode_body_data(data)

    parts = payload.get("parts")
    if isinstance(parts, list):
        for part in parts:
            if isinstance(part, dict) and part.get("mimeType") == "text/plain":
                return decode_body_data(_as_dict(part.get("body")).get("data"))
    return ""


def decode_body_data(data: Any) -> str:
    """Decode base64 / base64url body data to text, "" on failure."""
    if not isinstance(data, str) or not data:
        return ""
    # Gmail sends base64url; accept standard base64 too
    normalized = data.strip().replace("+", "-").replace("/", "_")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.urlsafe_b64decode(normalized).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return ""


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
