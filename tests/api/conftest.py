"""
API test fixtures.

Provides a TestClient whose services are overridden with mocks. The
lifespan does not run, so no chunk log is replayed and no indexing starts.

Dependencies: pytest, fastapi
System role: API test infrastructure
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from doc_assistant.api.deps import (
    get_chat_service,
    get_chunk_store,
    get_indexing_service,
    get_retriever,
)
from doc_assistant.api.main import create_app


@pytest.fixture
def mock_retriever() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mock_indexing_service() -> MagicMock:
    """Provide mock indexing service that is idle."""
    service = MagicMock()
    service.is_indexing = False
    service.index_repository = AsyncMock()
    service.reprocess_repository = AsyncMock()
    service.status.return_value = []
    return service


@pytest.fixture
def mock_chat_service() -> MagicMock:
    service = MagicMock()
    service.answer = AsyncMock()
    return service


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock()
    store.count.return_value = 0
    store.size_on_disk_bytes.return_value = -1
    return store


@pytest.fixture
def client(mock_retriever, mock_indexing_service, mock_chat_service, mock_store) -> TestClient:
    """Provide TestClient with all services overridden."""
    app = create_app()
    app.dependency_overrides[get_retriever] = lambda: mock_retriever
    app.dependency_overrides[get_indexing_service] = lambda: mock_indexing_service
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    app.dependency_overrides[get_chunk_store] = lambda: mock_store
    return TestClient(app)
