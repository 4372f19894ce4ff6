import asyncpg

from blog_entities.entities import User, UserSchema, to_email_address
from blog_entities.repository import Repository, RepositoryConfig
from blog_entities.schema import USERS_TABLE


class UserRepository(Repository[User]):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(entity_class=User, table_name=USERS_TABLE, config=config)

    async def find_by_email(
        self, email: str, *, conn: asyncpg.Connection | None = None
    ) -> User | None:
        return await self.where(UserSchema.email, to_email_address(email)).first(conn=conn)
