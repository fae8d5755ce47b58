"""Tests for @in_session decorator with query tracking"""

import pytest

from blogstore.author_repository import AuthorRepository
from blogstore.entities import CreateUser
from blogstore.repository import Repository
from blogstore.store_context import StoreManager, in_session


class UserDirectory:
    def __init__(self, store):
        self.store = store
        self.users = AuthorRepository()

    @in_session(query_logs=True)
    async def create_and_fetch(self, name: str):
        user = await self.users.create(CreateUser(name=name, email=f"{name}@example.com"))
        found = await self.users.find_by_id(user.id)

        tracker = Repository.get_query_tracker()
        assert tracker is not None
        assert tracker.count() == 2  # INSERT and SELECT

        return found, tracker.get_queries()

    @in_session()
    async def create(self, name: str):
        user = await self.users.create(CreateUser(name=name, email=f"{name}@example.com"))
        assert Repository.get_query_tracker() is None
        return user

    @in_session()
    async def current_store(self):
        return StoreManager.get_current_store()


@pytest.mark.asyncio
async def test_in_session_with_query_logs_enabled(store):
    """Test @in_session decorator with query_logs=True"""
    result, queries = await UserDirectory(store).create_and_fetch("ada")

    assert result is not None
    assert result.name == "ada"
    assert len(queries) == 2
    assert "INSERT INTO users" in queries[0].query
    assert queries[1].query == "SELECT * FROM users WHERE id = $1"


@pytest.mark.asyncio
async def test_in_session_without_query_logs(store):
    """Test @in_session decorator with query_logs=False (default)"""
    user = await UserDirectory(store).create("grace")
    assert user.id == "1"


@pytest.mark.asyncio
async def test_in_session_binds_own_store(store):
    """The decorated method runs against self.store and releases it afterwards"""
    directory = UserDirectory(store)

    assert await directory.current_store() is store
    assert StoreManager.get_current_store() is None
    assert not store.lock.locked()


@pytest.mark.asyncio
async def test_in_session_inside_open_session(store):
    """Calling a decorated method inside a session on the same store reuses it"""
    directory = UserDirectory(store)
    async with StoreManager.session(store):
        await directory.create("linus")
        assert await AuthorRepository().count() == 1
