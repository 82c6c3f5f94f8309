import logging
import time
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import Database
from app.errors import ErrorType
from app.exceptions import AppException, format_validation_errors
from app.models import Feedback
from app.schemas.feedback import FeedbackCreate
from app.services.sentiment_service import SentimentAnalyzer

logger = logging.getLogger(__name__)


async def enrich_feedback(analyzer: SentimentAnalyzer, data: FeedbackCreate) -> dict[str, Any]:
    """Score the feedback text and record how long the analyzer took.

    Only the analyzer call is timed. Enrichment is mandatory: an analyzer
    failure propagates as ENRICHMENT_FAILED.
    """
    start = time.perf_counter()
    result = await analyzer.analyze(data.feedback_text)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.debug(f"Sentiment analysis took {elapsed_ms} ms")

    return {
        **data.model_dump(),
        "feedback_score": result.score,
        "response_time": elapsed_ms,
    }


def validate_feedback_input(data: Any) -> FeedbackCreate:
    if isinstance(data, FeedbackCreate):
        return data
    if not isinstance(data, dict):
        raise AppException(ErrorType.VALIDATION_ERROR, "Feedback payload must be an object")
    try:
        return FeedbackCreate.model_validate(data)
    except ValidationError as e:
        raise AppException(ErrorType.VALIDATION_ERROR, format_validation_errors(e.errors()))


async def create_feedback(db: Database, analyzer: SentimentAnalyzer, data: Any) -> Feedback:
    """Enrich a feedback with its sentiment score and store it."""
    feedback_input = validate_feedback_input(data)
    enriched = await enrich_feedback(analyzer, feedback_input)

    try:
        async with db.session() as session:
            async with session.begin():
                feedback = Feedback(**enriched)
                session.add(feedback)
                await session.flush()
            await session.refresh(feedback)
    except SQLAlchemyError as e:
        raise db.translate_error(e, fallback=ErrorType.CREATION_FAILED)

    logger.info(f"Created feedback {feedback.id} with score {feedback.feedback_score}")
    return feedback


async def get_feedbacks(db: Database) -> list[Feedback]:
    try:
        async with db.session() as session:
            result = await session.execute(select(Feedback).order_by(Feedback.id))
            return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise db.translate_error(e)
