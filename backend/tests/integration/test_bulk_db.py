import pytest
from unittest.mock import patch
from sqlalchemy import select, func

from app.config import Config
from app.db.seed import seed_database, PRODUCTS_DATA, USERS_DATA
from app.models import Product, Feedback, User


def film(i: int) -> dict:
    return {
        "title": f"Film {i}",
        "image": f"https://img.example.com/film-{i}.jpg",
        "type": "FILM",
        "genre_category": "Drama",
        "director": "Agnes Varda",
        "duration": 90 + i,
        "description": f"Film number {i}.",
    }


async def count_rows(database, model) -> int:
    async with database.session() as session:
        return await session.scalar(select(func.count()).select_from(model))


@pytest.fixture(autouse=True)
def default_chunks():
    with patch.object(Config, "PRODUCT_CHUNK_SIZE", 10), \
         patch.object(Config, "FEEDBACK_CHUNK_SIZE", 5), \
         patch.object(Config, "BCRYPT_ROUNDS", 4):
        yield


class TestBulkIntegration:
    """Bulk endpoints against a real database."""

    @pytest.mark.asyncio
    async def test_products_partial_failure(self, client, database):
        products = [film(i) for i in range(7)]
        products[2] = {**products[2], "type": "GAME"}
        products[5] = {k: v for k, v in products[5].items() if k != "director"}

        response = await client.post("/utils/create-products-in-bulk", json={"products": products})

        assert response.status_code == 201
        data = response.json()
        assert data["success_count"] == 5
        assert data["failure_count"] == 2
        assert data["errors"] == [
            'Product type "GAME" not valid!',
            "Missing required fields: director",
        ]
        assert await count_rows(database, Product) == 5

    @pytest.mark.asyncio
    async def test_empty_products(self, client, database):
        response = await client.post("/utils/create-products-in-bulk", json={"products": []})

        assert response.status_code == 400
        assert await count_rows(database, Product) == 0

    @pytest.mark.asyncio
    async def test_feedbacks_partial_failure(self, client, database):
        user = await client.post("/user", json={
            "email": "bulk@example.com", "password": "pw", "first_name": "Bulk", "last_name": "User"
        })
        product = await client.post("/product", json=film(1))
        user_id, product_id = user.json()["id"], product.json()["id"]

        feedbacks = [
            {"feedback_text": "great", "user_id": user_id, "product_id": product_id},
            {"feedback_text": "written in an outage", "user_id": user_id, "product_id": product_id},
            {"feedback_text": "bad", "user_id": 999, "product_id": product_id},
            {"feedback_text": "good", "user_id": user_id, "product_id": product_id},
        ]

        response = await client.post("/utils/create-feedbacks-in-bulk", json={"feedbacks": feedbacks})

        assert response.status_code == 201
        data = response.json()
        assert data["success_count"] == 2
        assert data["failure_count"] == 2
        assert data["errors"][0] == "Error while analyzing the feedback: Model is currently loading"
        assert data["errors"][1].startswith("Foreign key constraint failed")
        assert await count_rows(database, Feedback) == 2

        stats = await client.get(f"/statistic/{product_id}")
        assert stats.json()["averageScore"] == 4.5

    @pytest.mark.asyncio
    async def test_feedback_failure_spares_its_chunk(self, client, database):
        user = await client.post("/user", json={
            "email": "chunk@example.com", "password": "pw", "first_name": "Chunk", "last_name": "User"
        })
        product = await client.post("/product", json=film(2))
        user_id, product_id = user.json()["id"], product.json()["id"]

        feedbacks = [
            {"feedback_text": "great", "user_id": user_id, "product_id": product_id},
            {"feedback_text": "good", "user_id": user_id, "product_id": product_id},
            {"feedback_text": "bad", "user_id": 999, "product_id": product_id},
            {"feedback_text": "okay", "user_id": user_id, "product_id": product_id},
        ]

        response = await client.post("/utils/create-feedbacks-in-bulk", json={"feedbacks": feedbacks})

        assert response.status_code == 201
        data = response.json()
        assert data["success_count"] == 3
        assert data["failure_count"] == 1
        assert data["errors"][0].startswith("Foreign key constraint failed")
        assert await count_rows(database, Feedback) == 3


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_database(self, client, database):
        assert await seed_database(database) is True

        assert await count_rows(database, Product) == len(PRODUCTS_DATA)
        assert await count_rows(database, User) == len(USERS_DATA)

        books = await client.get("/product/type/BOOK")
        assert {b["author"] for b in books.json()} == {"Frank Herbert", "Umberto Eco"}

        # Second run is a no-op
        assert await seed_database(database) is False
        assert await count_rows(database, Product) == len(PRODUCTS_DATA)
