"""Pytest configuration and fixtures."""
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from projectsync.main import app
from projectsync.services.project_store import ProjectStore
from projectsync.storage import MemoryStorage, SnapshotRepository


@pytest.fixture
def storage():
    """Empty in-memory snapshot storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Project store over a fresh workspace (Inbox only)."""
    return ProjectStore(SnapshotRepository(storage))


@pytest.fixture
def mock_advisor():
    """Roadmap advisor whose request_roadmap is an AsyncMock."""
    advisor = MagicMock()
    advisor.request_roadmap = AsyncMock()
    return advisor


@pytest_asyncio.fixture
async def app_client(storage, mock_advisor):
    """
    Create a test client over a fresh in-memory workspace.

    This fixture:
    - Opens the global workspace on in-memory storage and a mock advisor
    - Yields an async HTTP client for testing
    - Closes the workspace after each test
    """
    from projectsync.workspace import workspace

    workspace.open(storage=storage, advisor=mock_advisor)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    workspace.close()
