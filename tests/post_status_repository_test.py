from uuid import uuid4

import asyncpg
import pytest

from blog_entities.db_context import DatabaseManager, transactional
from blog_entities.entities import PostStatusState
from blog_entities.post_status_repository import PostStatusRepository
from tests.sample_entities import TEST_POOL, make_post_status

pytestmark = pytest.mark.usefixtures("test_db_pool")


class TestPostStatusRepository:
    @pytest.fixture
    def status_repo(self):
        return PostStatusRepository()

    @pytest.mark.asyncio
    @transactional(TEST_POOL)
    async def test_insert_and_find_by_id(self, status_repo):
        status = await status_repo.insert(make_post_status(state="deleted"))

        found = await status_repo.find_by_id(status.id)
        assert found.state == PostStatusState.DELETED
        assert found.to_json() == {"postStatusId": str(status.id), "postStatusState": "deleted"}

    @pytest.mark.asyncio
    @transactional(TEST_POOL)
    async def test_find_by_state(self, status_repo):
        active = await status_repo.insert(make_post_status(state="active"))
        deleted = await status_repo.insert(make_post_status(state="deleted"))

        assert [s.id for s in await status_repo.find_by_state("ACTIVE")] == [active.id]
        assert [s.id for s in await status_repo.find_by_state(PostStatusState.DELETED)] == [
            deleted.id
        ]

    @pytest.mark.asyncio
    async def test_find_by_unknown_state(self, status_repo):
        with pytest.raises(ValueError):
            await status_repo.find_by_state("archived")

    @pytest.mark.asyncio
    @transactional(TEST_POOL)
    async def test_update_state(self, status_repo):
        status = await status_repo.insert(make_post_status())
        status.state = "deleted"

        assert await status_repo.update(status) == status
        assert (await status_repo.find_by_id(status.id)).state == "deleted"

    @pytest.mark.asyncio
    @transactional(TEST_POOL)
    async def test_table_rejects_unknown_state(self):
        conn = DatabaseManager.get_current_connection()

        with pytest.raises(asyncpg.CheckViolationError):
            async with conn.transaction():
                await conn.execute(
                    "INSERT INTO post_statuses (id, state) VALUES ($1, $2)",
                    uuid4(),
                    "archived",
                )
