import pytest
import pytest_asyncio

from blogstore import BlogConfig, BlogService, ContentStore, seed_store


@pytest_asyncio.fixture
async def store():
    """A fresh, empty content store for each test."""
    return ContentStore("test")


@pytest_asyncio.fixture
async def seeded_store():
    """A content store loaded with the sample blog data."""
    return await seed_store(ContentStore("seeded"))


@pytest.fixture
def service(seeded_store):
    """A blog service over the sample data with the default configuration."""
    return BlogService(seeded_store)


@pytest.fixture
def empty_service(store):
    """A blog service over an empty store."""
    return BlogService(store, BlogConfig())
