"""Error kinds raised by entity validation and persistence"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

T = TypeVar("T", bound=BaseModel)


class ErrorKind(StrEnum):
    INVALID_ARGUMENT = "invalid_argument"
    OUT_OF_RANGE = "out_of_range"
    WRONG_TYPE = "wrong_type"
    STORAGE = "storage"


# pydantic's own error types that can still surface from entity validation
_PYDANTIC_KINDS = {
    "missing": ErrorKind.INVALID_ARGUMENT,
    "frozen_field": ErrorKind.INVALID_ARGUMENT,
    "extra_forbidden": ErrorKind.INVALID_ARGUMENT,
    "uuid_parsing": ErrorKind.INVALID_ARGUMENT,
    "enum": ErrorKind.INVALID_ARGUMENT,
    "string_too_long": ErrorKind.OUT_OF_RANGE,
    "string_too_short": ErrorKind.OUT_OF_RANGE,
}


def invalid_argument(
    message: str, context: dict[str, Any] | None = None
) -> PydanticCustomError:
    return PydanticCustomError(ErrorKind.INVALID_ARGUMENT.value, message, context)


def out_of_range(
    message: str, context: dict[str, Any] | None = None
) -> PydanticCustomError:
    return PydanticCustomError(ErrorKind.OUT_OF_RANGE.value, message, context)


def wrong_type(
    message: str, context: dict[str, Any] | None = None
) -> PydanticCustomError:
    return PydanticCustomError(ErrorKind.WRONG_TYPE.value, message, context)


def kind_of(error_type: str) -> ErrorKind:
    """Map a pydantic error type string to an ErrorKind."""
    if error_type in ErrorKind.__members__.values():
        return ErrorKind(error_type)
    if error_type in _PYDANTIC_KINDS:
        return _PYDANTIC_KINDS[error_type]
    if error_type.endswith("_type"):
        return ErrorKind.WRONG_TYPE
    return ErrorKind.INVALID_ARGUMENT


@dataclass(frozen=True)
class FieldError:
    """A single field failure"""

    field: str
    kind: ErrorKind
    message: str


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ValidationError into FieldError entries."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.append(FieldError(location, kind_of(error["type"]), error["msg"]))
    return errors


@dataclass
class EntityResult(Generic[T]):
    """Outcome of validating entity data without raising.

    Exactly one of ``entity`` and ``errors`` is populated.
    """

    entity: T | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.entity is not None

    def kinds(self) -> set[ErrorKind]:
        return {error.kind for error in self.errors}


def validate_entity(
    entity_class: type[T], data: dict[str, Any]
) -> EntityResult[T]:
    """Build an entity from ``data`` and report failures as a result.

    Usage:
        result = validate_entity(Author, payload)
        if not result.ok:
            return {"errors": [e.kind for e in result.errors]}
    """
    try:
        return EntityResult(entity=entity_class.model_validate(data))
    except ValidationError as exc:
        return EntityResult(errors=field_errors(exc))
