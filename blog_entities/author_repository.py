import asyncpg

from blog_entities.entities import Author, AuthorSchema, to_email_address
from blog_entities.repository import Repository, RepositoryConfig
from blog_entities.schema import AUTHORS_TABLE


class AuthorRepository(Repository[Author]):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(entity_class=Author, table_name=AUTHORS_TABLE, config=config)

    async def find_by_username(
        self, username: str, *, conn: asyncpg.Connection | None = None
    ) -> list[Author]:
        """Authors whose username contains ``username``, ordered by username.

        ``%`` and ``_`` in the search term match themselves, not any character.
        """
        username = username.strip()
        if not username:
            raise ValueError("username search term is empty")
        return await (
            self.where_contains(AuthorSchema.username, username)
            .order_by(AuthorSchema.username)
            .get(conn=conn)
        )

    async def find_by_email(
        self, email: str, *, conn: asyncpg.Connection | None = None
    ) -> Author | None:
        return await self.where(AuthorSchema.email, to_email_address(email)).first(conn=conn)

    async def find_by_activation_token(
        self, activation_token: str, *, conn: asyncpg.Connection | None = None
    ) -> Author | None:
        return await self.where(
            AuthorSchema.activation_token, activation_token.strip()
        ).first(conn=conn)
