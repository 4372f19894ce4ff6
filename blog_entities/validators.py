"""
Reusable field validators for entity attributes.

Every validator follows the same sequence: type check, trim, sanitize,
presence check, length check, then an optional format check. Validators are
plain functions; the entity classes bind them to fields with
``pydantic.BeforeValidator`` so they run on construction and on assignment.
"""

import re
from collections.abc import Callable
from enum import StrEnum
from typing import Annotated, Any, TypeVar

from pydantic import AnyUrl, BeforeValidator, EmailStr, TypeAdapter, ValidationError

from blog_entities.errors import invalid_argument, out_of_range, wrong_type

Sanitizer = Callable[[str], str]
E = TypeVar("E", bound=StrEnum)

_TAG_PATTERN = re.compile(r"<[^>]*>?")
_CONTROL_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
# characters permitted to survive URL sanitization
_URL_DISALLOWED_PATTERN = re.compile(r"[^A-Za-z0-9$\-_.+!*'(),{}|\\^~\[\]`<>#%\";/?:@&=]")

PASSWORD_HASH_LENGTH = 97
PASSWORD_HASH_ALGORITHM = "argon2id"
_PHC_PATTERN = re.compile(
    r"^\$(?P<algorithm>[a-z0-9-]+)\$v=\d+\$m=\d+,t=\d+,p=\d+\$[A-Za-z0-9+/]+\$[A-Za-z0-9+/]+$"
)

_url_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


def sanitize_string(value: str) -> str:
    """Strip markup tags and control characters."""
    return _CONTROL_PATTERN.sub("", _TAG_PATTERN.sub("", value))


def sanitize_url(value: str) -> str:
    """Drop every character that may not appear in a URL."""
    return _URL_DISALLOWED_PATTERN.sub("", value)


def check_string(
    value: Any,
    *,
    max_length: int,
    required: bool = False,
    sanitizer: Sanitizer = sanitize_string,
) -> str | None:
    """Trim, sanitize and bound a string.

    Optional values that are ``None`` or empty after sanitizing become ``None``.
    """
    if value is None:
        if required:
            raise invalid_argument("value is required")
        return None
    if not isinstance(value, str):
        raise wrong_type(
            "expected type str, got {type_name}", {"type_name": type(value).__name__}
        )

    value = sanitizer(value.strip()).strip()
    if not value:
        if required:
            raise invalid_argument("value is empty or insecure")
        return None
    if len(value) > max_length:
        raise out_of_range(
            "value exceeds valid range ({max_length} characters)",
            {"max_length": max_length},
        )
    return value


def check_url(value: Any, *, max_length: int, required: bool = False) -> str | None:
    url = check_string(value, max_length=max_length, required=required, sanitizer=sanitize_url)
    if url is None:
        return None
    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError:
        raise invalid_argument("'{value}' is not a valid URL", {"value": url}) from None
    if not parsed.host:
        raise invalid_argument("'{value}' is not a valid URL", {"value": url})
    return url


def check_email(value: Any, *, max_length: int, required: bool = True) -> str | None:
    email = check_string(value, max_length=max_length, required=required)
    if email is None:
        return None
    try:
        normalized = _email_adapter.validate_python(email)
    except ValidationError:
        raise invalid_argument(
            "'{value}' is not a valid email address", {"value": email}
        ) from None
    if len(normalized) > max_length:
        raise out_of_range(
            "value exceeds valid range ({max_length} characters)",
            {"max_length": max_length},
        )
    return normalized


def check_password_hash(
    value: Any,
    *,
    length: int = PASSWORD_HASH_LENGTH,
    algorithm: str = PASSWORD_HASH_ALGORITHM,
) -> str:
    """Accept only a PHC-formatted hash of exactly ``length`` characters for ``algorithm``."""
    password_hash = check_string(value, max_length=length, required=True)
    if len(password_hash) != length:
        raise out_of_range(
            "password hash must be exactly {length} characters", {"length": length}
        )
    match = _PHC_PATTERN.match(password_hash)
    if match is None or match.group("algorithm") != algorithm:
        raise invalid_argument(
            "password hash is not an {algorithm} hash", {"algorithm": algorithm}
        )
    return password_hash


def bounded_str(max_length: int, *, required: bool = False) -> Any:
    """Annotated string type bound to ``check_string``."""
    validator = BeforeValidator(
        lambda value: check_string(value, max_length=max_length, required=required)
    )
    if required:
        return Annotated[str, validator]
    return Annotated[str | None, validator]


def url_str(max_length: int, *, required: bool = False) -> Any:
    validator = BeforeValidator(
        lambda value: check_url(value, max_length=max_length, required=required)
    )
    if required:
        return Annotated[str, validator]
    return Annotated[str | None, validator]


def email_str(max_length: int) -> Any:
    return Annotated[
        str, BeforeValidator(lambda value: check_email(value, max_length=max_length))
    ]


def check_choice(value: Any, *, choices: type[E]) -> E:
    """Match a trimmed, case-insensitive string against the members of ``choices``."""
    if isinstance(value, choices):
        return value
    if not isinstance(value, str):
        raise wrong_type(
            "expected type str, got {type_name}", {"type_name": type(value).__name__}
        )
    normalized = value.strip().lower()
    for member in choices:
        if member.value == normalized:
            return member
    raise invalid_argument(
        "'{value}' is not one of {allowed}",
        {"value": value, "allowed": ", ".join(member.value for member in choices)},
    )


def choice_of(choices: type[E]) -> Any:
    return Annotated[
        choices, BeforeValidator(lambda value: check_choice(value, choices=choices))
    ]


PasswordHash = Annotated[str, BeforeValidator(check_password_hash)]
