"""Data URI helpers."""
import base64
import binascii
import re

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*?);base64,(?P<data>.*)$", re.DOTALL)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as ``data:<mime>;base64,<payload>``."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime type, raw bytes).

    Raises ValueError for anything that is not a base64 data URI.
    """
    match = _DATA_URI_RE.match(uri.strip()) if isinstance(uri, str) else None
    if match is None:
        raise ValueError("Expected a base64 data URI ('data:<mimetype>;base64,<data>')")
    mime = match.group("mime") or "application/octet-stream"
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid base64 payload in data URI: {exc}") from exc
    return mime, payload
