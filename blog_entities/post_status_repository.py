import asyncpg

from blog_entities.entities import PostStatus, PostStatusSchema, PostStatusState
from blog_entities.repository import Repository, RepositoryConfig
from blog_entities.schema import POST_STATUSES_TABLE


class PostStatusRepository(Repository[PostStatus]):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(
            entity_class=PostStatus, table_name=POST_STATUSES_TABLE, config=config
        )

    async def find_by_state(
        self, state: PostStatusState | str, *, conn: asyncpg.Connection | None = None
    ) -> list[PostStatus]:
        state = PostStatusState(state.strip().lower())
        return await self.where(PostStatusSchema.state, state.value).get(conn=conn)
