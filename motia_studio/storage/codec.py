"""JSON codec for collection snapshots.

Datetimes are written as ``YYYY-MM-DDTHH:mm:ss.sssZ`` (UTC, milliseconds).
On read, any string of exactly that shape becomes an aware UTC datetime again;
every other string is left alone.
"""

from datetime import UTC, datetime
from enum import Enum
import json
import re
from typing import Any

from motia_studio.models.base import format_timestamp

DATETIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")


def encode_datetime(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision."""
    return format_timestamp(value)


def decode_datetime(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=UTC)


def _default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return encode_datetime(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _revive(value: Any) -> Any:
    if isinstance(value, str):
        if DATETIME_PATTERN.fullmatch(value):
            return decode_datetime(value)
        return value
    if isinstance(value, dict):
        return {key: _revive(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_revive(item) for item in value]
    return value


def dumps(records: dict[str, Any]) -> str:
    """Serialize a collection snapshot (id -> record mapping)."""
    return json.dumps(records, default=_default, indent=2, ensure_ascii=False)


def loads(text: str) -> dict[str, Any]:
    """Deserialize a collection snapshot.

    Blank input is an empty collection.

    Raises:
        ValueError: If the text is not JSON or not a JSON object.
    """
    if not text or not text.strip():
        return {}
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Collection snapshot must be a JSON object, got {type(data).__name__}")
    return _revive(data)
