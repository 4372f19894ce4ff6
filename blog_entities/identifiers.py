"""Identifier normalization for entity primary keys"""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator, TypeAdapter

from blog_entities.errors import invalid_argument, out_of_range, wrong_type

UUID_BYTES_LENGTH = 16
# hex digits with and without the four hyphens
UUID_TEXT_LENGTHS = (32, 36)
NIL_UUID = UUID(int=0)


def validate_identifier(value: Any) -> UUID:
    """Normalize a UUID, its text form, or its 16 raw bytes into a UUID.

    Raises:
        wrong_type: value is not a UUID, str or bytes
        invalid_argument: value cannot be parsed as a UUID
        out_of_range: bytes of an unusable length, or the nil UUID
    """
    if isinstance(value, UUID):
        uuid = value
    elif isinstance(value, bytes | bytearray):
        raw = bytes(value)
        if len(raw) == UUID_BYTES_LENGTH:
            uuid = UUID(bytes=raw)
        elif len(raw) in UUID_TEXT_LENGTHS:
            uuid = _parse_text(raw.decode("ascii", errors="replace"))
        else:
            raise out_of_range(
                "identifier must be {expected} bytes, got {actual}",
                {"expected": UUID_BYTES_LENGTH, "actual": len(raw)},
            )
    elif isinstance(value, str):
        uuid = _parse_text(value)
    else:
        raise wrong_type(
            "identifier must be a UUID, str or bytes, got {type_name}",
            {"type_name": type(value).__name__},
        )

    if uuid == NIL_UUID:
        raise out_of_range("identifier must not be the nil UUID")
    return uuid


def _parse_text(text: str) -> UUID:
    try:
        return UUID(text.strip())
    except ValueError:
        raise invalid_argument(
            "identifier '{value}' is not a valid UUID", {"value": text}
        ) from None


Identifier = Annotated[UUID, BeforeValidator(validate_identifier)]

_identifier_adapter = TypeAdapter(Identifier)


def to_identifier(value: Any) -> UUID:
    """Validate a standalone identifier, raising pydantic.ValidationError on failure."""
    return _identifier_adapter.validate_python(value)
