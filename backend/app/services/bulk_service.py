"""
Bulk ingestion - creates many products or feedbacks in fixed-size chunks.

Chunks run one after another; the items of a chunk run concurrently and the
chunk only finishes once every item has either succeeded or failed. Item
failures are collected into the summary instead of being raised.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from app.config import Config
from app.db.database import Database
from app.errors import ErrorType
from app.exceptions import AppException
from app.services.feedback_service import create_feedback
from app.services.product_service import create_product
from app.services.sentiment_service import SentimentAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    success_count: int = 0
    failure_count: int = 0
    errors: list[str] = field(default_factory=list)


def chunk_items(items: list, size: int) -> list[list]:
    """Split a list into contiguous slices of at most `size` items."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    return [items[i:i + size] for i in range(0, len(items), size)]


def _error_message(error: BaseException) -> str:
    if isinstance(error, AppException):
        return error.message
    return str(error) or error.__class__.__name__


async def process_in_chunks(
    items: Any,
    chunk_size: int,
    handler: Callable[[Any], Awaitable[Any]],
    kind: str = "items"
) -> BulkResult:
    """Run `handler` on every item, chunk by chunk, and summarize the outcomes.

    Raises:
        AppException: INVALID_BULK_INPUT if `items` is not a non-empty list;
            nothing is processed in that case
    """
    if not isinstance(items, list) or not items:
        raise AppException(
            ErrorType.INVALID_BULK_INPUT,
            f"{kind.capitalize()} array is required and should not be empty."
        )

    summary = BulkResult()
    chunks = chunk_items(items, chunk_size)

    for index, chunk in enumerate(chunks, start=1):
        outcomes = await asyncio.gather(
            *(handler(item) for item in chunk),
            return_exceptions=True
        )

        failures = [_error_message(o) for o in outcomes if isinstance(o, BaseException)]
        summary.success_count += len(outcomes) - len(failures)
        summary.failure_count += len(failures)
        summary.errors.extend(failures)

        logger.info(f"Bulk {kind}: chunk {index}/{len(chunks)} done, {len(failures)} failed")

    logger.info(
        f"Bulk {kind}: {summary.success_count} created, {summary.failure_count} failed"
    )
    return summary


async def create_products_in_bulk(db: Database, items: Any, chunk_size: int | None = None) -> BulkResult:
    async def handler(item):
        return await create_product(db, item)

    return await process_in_chunks(items, chunk_size or Config.PRODUCT_CHUNK_SIZE, handler, kind="products")


async def create_feedbacks_in_bulk(
    db: Database,
    analyzer: SentimentAnalyzer,
    items: Any,
    chunk_size: int | None = None
) -> BulkResult:
    async def handler(item):
        return await create_feedback(db, analyzer, item)

    return await process_in_chunks(items, chunk_size or Config.FEEDBACK_CHUNK_SIZE, handler, kind="feedbacks")
