"""JSON serialization utilities."""
import json


def json_dump(payload: object) -> str:
    """Serialize object to pretty JSON string (UTF-8 text kept as is)."""
    return json.dumps(payload, ensure_ascii=False, indent=2)
