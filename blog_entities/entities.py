from enum import StrEnum
from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel, TypeAdapter
from pydantic import Field as ModelField
from pydantic.config import ConfigDict

from blog_entities.identifiers import Identifier
from blog_entities.validators import (
    PasswordHash,
    bounded_str,
    choice_of,
    email_str,
    url_str,
)


AvatarUrl = url_str(255)
ActivationToken = bounded_str(32)
EmailAddress = email_str(128)
Username = bounded_str(32, required=True)
Location = bounded_str(20)
PhoneNumber = bounded_str(32)

_email_adapter = TypeAdapter(EmailAddress)

T = TypeVar("T")


def to_email_address(value: Any) -> str:
    """Normalize an email address the way entity fields store it.

    Raises pydantic.ValidationError when ``value`` is not a valid address.
    """
    return _email_adapter.validate_python(value)


class Column(Generic[T]):
    """Type-safe column reference for schema classes.

    Usage:
        class AuthorSchema(SchemaBase):
            username = Column[str]("username")

    This allows for:
        repo.where(AuthorSchema.username, "wharris21")
    """

    def __init__(self, column_name: str):
        """
        Args:
            column_name: The actual database column name
        """
        self._column_name = column_name

    @property
    def column(self) -> str:
        """Return the underlying database column name."""
        return self._column_name

    def __str__(self) -> str:
        return self._column_name

    def __repr__(self) -> str:
        return f"Column({self._column_name})"


class SchemaBase:
    """Base class for schema definitions with type-safe columns.

    Usage:
        class UserSchema(SchemaBase):
            id = Column[str]("id")
            email = Column[str]("email")
    """

    pass


class BaseEntity(BaseModel):
    """Base entity class for all database models.

    Fields are validated on construction and again on every attribute
    assignment; the identifier cannot be reassigned once set.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        use_enum_values=True, validate_assignment=True, extra="ignore"
    )
    id: Identifier = ModelField(default_factory=uuid4, frozen=True)

    def to_json(self) -> dict[str, Any]:
        """Serialize every field, keyed by its JSON name, with the id as a string."""
        return self.model_dump(mode="json", by_alias=True)


class Author(BaseEntity):
    id: Identifier = ModelField(
        default_factory=uuid4, frozen=True, serialization_alias="authorId"
    )
    avatar_url: AvatarUrl = ModelField(
        default=None, serialization_alias="authorAvatarUrl"
    )
    activation_token: ActivationToken = ModelField(
        default=None, serialization_alias="authorActivationToken"
    )
    email: EmailAddress = ModelField(serialization_alias="authorEmail")
    password_hash: PasswordHash = ModelField(serialization_alias="authorHash")
    username: Username = ModelField(serialization_alias="authorUsername")


class AuthorSchema(SchemaBase):
    id = Column[str]("id")
    activation_token = Column[str]("activation_token")
    email = Column[str]("email")
    username = Column[str]("username")


class User(BaseEntity):
    id: Identifier = ModelField(
        default_factory=uuid4, frozen=True, serialization_alias="userId"
    )
    password_hash: PasswordHash = ModelField(serialization_alias="userHash")
    location: Location = ModelField(
        default=None, serialization_alias="userLocation"
    )
    email: EmailAddress = ModelField(serialization_alias="userEmail")
    phone_number: PhoneNumber = ModelField(
        default=None, serialization_alias="userPhoneNumber"
    )


class UserSchema(SchemaBase):
    id = Column[str]("id")
    email = Column[str]("email")


class PostStatusState(StrEnum):
    ACTIVE = "active"
    DELETED = "deleted"


PostState = choice_of(PostStatusState)


class PostStatus(BaseEntity):
    id: Identifier = ModelField(
        default_factory=uuid4, frozen=True, serialization_alias="postStatusId"
    )
    state: PostState = ModelField(
        default=PostStatusState.ACTIVE, serialization_alias="postStatusState"
    )


class PostStatusSchema(SchemaBase):
    id = Column[str]("id")
    state = Column[str]("state")
