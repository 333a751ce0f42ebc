"""Helpers for inline image attachments encoded as data URIs."""
import base64
import binascii
import re
from typing import Any, Dict, Tuple

ALLOWED_IMAGE_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/gif",
    "image/webp",
    "image/heic",
    "image/heif",
}

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w-]+=[\w.+-]+)*;base64,(?P<data>.*)$", re.DOTALL)


def parse_data_uri(data_uri: str) -> Tuple[str, str]:
    """Split a ``data:<mime>;base64,<payload>`` URI into (mime_type, payload).

    Raises ValueError for malformed URIs, non-image types or payloads that
    are not valid base64.
    """
    if not data_uri or not isinstance(data_uri, str):
        raise ValueError("Attachment must be a data URI")

    m = DATA_URI_RE.match(data_uri.strip())
    if not m:
        raise ValueError("Attachment must be a base64 data URI: 'data:<mimetype>;base64,<encoded_data>'")

    mime_type = m.group("mime").lower()
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise ValueError(f"Unsupported attachment type: {mime_type}")

    payload = re.sub(r"\s+", "", m.group("data"))
    if not payload:
        raise ValueError("Attachment payload is empty")
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Attachment payload is not valid base64") from exc

    return mime_type, payload


def to_data_uri(mime_type: str, payload: str) -> str:
    """Build a data URI from a MIME type and base64 payload."""
    return f"data:{mime_type};base64,{payload}"


def image_content_part(data_uri: str) -> Dict[str, Any]:
    """Inline media content part in the chat-model message format."""
    return {"type": "image_url", "image_url": {"url": data_uri}}


def text_content_part(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}
