from datetime import UTC, datetime
from types import UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current UTC time truncated to milliseconds, the precision snapshots keep."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:mm:ss.sssZ``.

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _is_text(annotation: Any) -> bool:
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, UnionType):
        args = get_args(annotation)
        return str in args and datetime not in args
    return False


def _is_text_list(annotation: Any) -> bool:
    return get_origin(annotation) is list and get_args(annotation) == (str,)


def _as_text(value: Any) -> Any:
    return format_timestamp(value) if isinstance(value, datetime) else value


def _as_text_list(value: Any) -> Any:
    if isinstance(value, list) and any(isinstance(item, datetime) for item in value):
        return [_as_text(item) for item in value]
    return value


class StudioModel(BaseModel):
    """Base for persisted records.

    Attributes are snake_case in Python and camelCase in snapshots.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def restore_text_fields(cls, data: Any) -> Any:
        """Undo date revival for text fields.

        Snapshot decoding turns every timestamp-shaped string into a datetime,
        including file contents, names or errors that merely look like one.
        """
        if not isinstance(data, dict):
            return data
        restored = None
        for name, field in cls.model_fields.items():
            if _is_text(field.annotation):
                convert = _as_text
            elif _is_text_list(field.annotation):
                convert = _as_text_list
            else:
                continue
            for key in {field.alias or name, name}:
                if key in data:
                    value = convert(data[key])
                    if value is not data[key]:
                        restored = restored if restored is not None else dict(data)
                        restored[key] = value
        return restored if restored is not None else data

    def to_record(self) -> dict:
        """Serialize for a storage adapter (camelCase keys, datetimes kept)."""
        return self.model_dump(by_alias=True, exclude_none=True)
