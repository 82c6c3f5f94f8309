import asyncio
import logging

from sqlalchemy import select

from app.config import Config
from app.db.database import Database
from app.models import Product
from app.schemas.user import UserCreate
from app.services.product_service import create_product
from app.services.user_service import create_user

logger = logging.getLogger(__name__)


# Sample products
PRODUCTS_DATA = [
    {
        "title": "Inception", "image": "https://img.example.com/inception.jpg",
        "type": "FILM", "genre_category": "Science Fiction",
        "director": "Christopher Nolan", "duration": 148,
        "description": "A thief steals secrets through dream-sharing technology.",
    },
    {
        "title": "Spirited Away", "image": "https://img.example.com/spirited-away.jpg",
        "type": "FILM", "genre_category": "Animation",
        "director": "Hayao Miyazaki", "duration": 125,
        "description": "A girl wanders into a world of spirits.",
    },
    {
        "title": "Dune", "image": "https://img.example.com/dune.jpg",
        "type": "BOOK", "genre_category": "Science Fiction",
        "publisher": "Chilton Books", "author": "Frank Herbert", "isbn": "9780441013593",
        "description": "Politics and prophecy on the desert planet Arrakis.",
    },
    {
        "title": "The Name of the Rose", "image": "https://img.example.com/name-of-the-rose.jpg",
        "type": "BOOK", "genre_category": "Mystery",
        "publisher": "Bompiani", "author": "Umberto Eco", "isbn": "9780156001311",
        "description": "A murder investigation in a medieval abbey.",
    },
    {
        "title": "Kind of Blue", "image": "https://img.example.com/kind-of-blue.jpg",
        "type": "MUSIC", "genre_category": "Jazz",
        "producer": "Teo Macero", "artist": "Miles Davis", "duration": 2755,
    },
    {
        "title": "Random Access Memories", "image": "https://img.example.com/ram.jpg",
        "type": "MUSIC", "genre_category": "Electronic",
        "producer": "Daft Punk", "artist": "Daft Punk", "duration": 4456,
    },
]

USERS_DATA = [
    UserCreate(email="ada@example.com", password="lovelace123", first_name="Ada", last_name="Lovelace"),
    UserCreate(email="alan@example.com", password="turing123", first_name="Alan", last_name="Turing"),
]


async def seed_database(db: Database) -> bool:
    """Create tables and sample data. Returns False if data already exists."""
    await db.create_all()

    async with db.session() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            logger.info("Database already seeded")
            return False

    for product in PRODUCTS_DATA:
        await create_product(db, product)

    for user in USERS_DATA:
        await create_user(db, user)

    logger.info("Database seeded successfully!")
    return True


async def main():
    db = Database(Config.DATABASE_URL, Config.DATABASE_TYPE)
    try:
        await seed_database(db)
    finally:
        await db.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
