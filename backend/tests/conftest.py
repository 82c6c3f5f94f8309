import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.database import Database, get_db
from app.services.sentiment_service import SentimentAnalyzer, SentimentResult, get_analyzer


@pytest.fixture
def mock_db():
    """Mock persistence gateway for testing without real DB connection."""
    return MagicMock(spec=Database)


@pytest.fixture
def mock_analyzer():
    """Mock sentiment analyzer that always answers 4 stars."""
    mock = MagicMock(spec=SentimentAnalyzer)
    mock.analyze = AsyncMock(return_value=SentimentResult(score=4, label="4 stars", confidence=0.8))
    return mock


@pytest.fixture
async def client(mock_db, mock_analyzer):
    """Async test client with mocked database and analyzer."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_analyzer] = lambda: mock_analyzer

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    # Restore
    app.dependency_overrides.clear()
