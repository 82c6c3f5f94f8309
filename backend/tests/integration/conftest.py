import json

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.database import Database, get_db
from app.services.sentiment_service import SentimentAnalyzer, get_analyzer

# Feedback words and the star rating the fake model gives them
KEYWORD_LABELS = {
    "terrible": "1 star",
    "bad": "2 stars",
    "okay": "3 stars",
    "good": "4 stars",
    "great": "5 stars",
}


def fake_model(request: httpx.Request) -> httpx.Response:
    """Stand-in for the inference endpoint; texts containing "outage" fail."""
    text = json.loads(request.content)["inputs"].lower()
    if "outage" in text:
        return httpx.Response(503, json={"error": "Model is currently loading"})

    label = next((lbl for word, lbl in KEYWORD_LABELS.items() if word in text), "3 stars")
    return httpx.Response(200, json=[[
        {"label": label, "score": 0.9},
        {"label": "1 star" if label != "1 star" else "5 stars", "score": 0.1},
    ]])


@pytest.fixture
async def database():
    """Fresh in-memory SQLite database with all tables."""
    db = Database("sqlite://", "sqlite")
    await db.create_all()
    yield db
    await db.disconnect()


@pytest.fixture
async def analyzer():
    analyzer = SentimentAnalyzer(
        url="https://inference.test/models/sentiment",
        token="hf_test",
        client=httpx.AsyncClient(transport=httpx.MockTransport(fake_model)),
    )
    yield analyzer
    await analyzer.aclose()


@pytest.fixture
async def client(database, analyzer):
    """Test client wired to the real database and the fake model."""
    app.dependency_overrides[get_db] = lambda: database
    app.dependency_overrides[get_analyzer] = lambda: analyzer

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
