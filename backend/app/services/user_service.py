import asyncio
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.config import Config
from app.db.database import Database
from app.errors import ErrorType
from app.models import User
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=Config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


async def get_users(db: Database) -> list[User]:
    try:
        async with db.session() as session:
            result = await session.execute(select(User).order_by(User.id))
            return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise db.translate_error(e)


async def create_user(db: Database, data: UserCreate) -> User:
    """Create a user; only the bcrypt hash of the password is stored."""
    # bcrypt is CPU bound, keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, data.password)

    try:
        async with db.session() as session:
            async with session.begin():
                user = User(
                    email=data.email,
                    password_hash=password_hash,
                    first_name=data.first_name,
                    last_name=data.last_name,
                )
                session.add(user)
                await session.flush()
    except SQLAlchemyError as e:
        raise db.translate_error(e, fallback=ErrorType.CREATION_FAILED)

    logger.info(f"Created user {user.id}")
    return user
