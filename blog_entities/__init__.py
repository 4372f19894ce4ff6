"""Validated blog entities with single-row PostgreSQL persistence"""

from blog_entities.author_repository import AuthorRepository
from blog_entities.db_context import DatabaseManager, transactional
from blog_entities.entities import Author, PostStatus, PostStatusState, User
from blog_entities.errors import EntityResult, ErrorKind, FieldError, validate_entity
from blog_entities.identifiers import to_identifier
from blog_entities.post_status_repository import PostStatusRepository
from blog_entities.repository import Repository, RepositoryConfig
from blog_entities.settings import DatabaseSettings
from blog_entities.user_repository import UserRepository

__all__ = [
    "Author",
    "User",
    "PostStatus",
    "PostStatusState",
    "Repository",
    "RepositoryConfig",
    "AuthorRepository",
    "UserRepository",
    "PostStatusRepository",
    "DatabaseManager",
    "DatabaseSettings",
    "transactional",
    "ErrorKind",
    "FieldError",
    "EntityResult",
    "validate_entity",
    "to_identifier",
]
